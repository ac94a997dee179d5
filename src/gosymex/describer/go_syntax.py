"""Typed view over tree-sitter Go syntax trees.

tree-sitter hands back untyped nodes tagged with a grammar string. This module
turns the handful of node kinds the describer cares about into small frozen
records (imports, type specs, function and method declarations) and renders
type expressions the way ``go/types.ExprString`` prints them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from tree_sitter import Language, Node, Parser
from tree_sitter_go import language as go_language

IMPORT_NODE_TYPES = {"import_spec"}

TYPE_SPEC_NODE_TYPES = {"type_spec", "type_alias"}

FUNC_NODE_TYPES = {"function_declaration", "method_declaration"}

# method_spec/method_spec_list come from grammar releases before generics
METHOD_NODE_TYPES = {"method_elem", "method_spec"}

PARAM_NODE_TYPES = {"parameter_declaration", "variadic_parameter_declaration"}

IDENTIFIER_NODE_TYPES = {
    "identifier",
    "type_identifier",
    "field_identifier",
    "package_identifier",
}


@dataclass(frozen=True, slots=True)
class FieldDecl:
    """A struct field or interface element; embedded members have no names."""

    names: Tuple[str, ...]
    type_text: str


@dataclass(frozen=True, slots=True)
class RecordShape:
    fields: Tuple[FieldDecl, ...] = ()


@dataclass(frozen=True, slots=True)
class ContractShape:
    methods: Tuple[FieldDecl, ...] = ()


@dataclass(frozen=True, slots=True)
class OtherShape:
    type_text: str = ""


TypeShape = Union[RecordShape, ContractShape, OtherShape]


@dataclass(frozen=True, slots=True)
class ParamGroup:
    names: Tuple[str, ...]
    type_text: str


@dataclass(frozen=True, slots=True)
class ResultGroup:
    name: Optional[str]
    type_text: str


@dataclass(frozen=True, slots=True)
class ImportNode:
    path: str


@dataclass(frozen=True, slots=True)
class TypeDeclNode:
    name: str
    shape: TypeShape


@dataclass(frozen=True, slots=True)
class FuncDeclNode:
    name: str
    receiver: Optional[str] = None
    params: Tuple[ParamGroup, ...] = ()
    results: Tuple[ResultGroup, ...] = ()


@dataclass(frozen=True, slots=True)
class OtherNode:
    kind: str


SyntaxNode = Union[ImportNode, TypeDeclNode, FuncDeclNode, OtherNode]


class GoSyntaxTree:
    def __init__(self, root: Node, source_bytes: bytes) -> None:
        self._root = root
        self._source_bytes = source_bytes

    @property
    def has_error(self) -> bool:
        return self._root.has_error

    def first_error_line(self) -> Optional[int]:
        for node in self._iterate(self._root):
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0] + 1
        return None

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield one typed node per tree node, parents first, siblings in source order."""
        for node in self._iterate(self._root):
            yield self._classify(node)

    # --- classification ---------------------------------------------------
    def _classify(self, node: Node) -> SyntaxNode:
        if node.type in IMPORT_NODE_TYPES:
            path_node = node.child_by_field_name("path")
            return ImportNode(path=self._node_text(path_node) if path_node else "")
        if node.type in TYPE_SPEC_NODE_TYPES:
            name_node = node.child_by_field_name("name")
            type_node = node.child_by_field_name("type")
            name = self._node_text(name_node) if name_node else ""
            if node.type == "type_alias":
                return TypeDeclNode(name=name, shape=OtherShape(self.type_text(type_node)))
            return TypeDeclNode(name=name, shape=self._shape(type_node))
        if node.type in FUNC_NODE_TYPES:
            return self._func_decl(node)
        return OtherNode(kind=node.type)

    def _shape(self, type_node: Optional[Node]) -> TypeShape:
        if type_node is None:
            return OtherShape()
        if type_node.type == "struct_type":
            return RecordShape(
                fields=tuple(self._field_decl(child) for child in self._struct_fields(type_node))
            )
        if type_node.type == "interface_type":
            return ContractShape(methods=tuple(self._interface_elems(type_node)))
        return OtherShape(self.type_text(type_node))

    def _struct_fields(self, struct_node: Node) -> List[Node]:
        fields: List[Node] = []
        for child in struct_node.named_children:
            if child.type != "field_declaration_list":
                continue
            fields.extend(sub for sub in child.named_children if sub.type == "field_declaration")
        return fields

    def _field_decl(self, node: Node) -> FieldDecl:
        names = tuple(self._node_text(name) for name in node.children_by_field_name("name"))
        type_text = self.type_text(node.child_by_field_name("type"))
        if not names and any(child.type == "*" for child in node.children):
            type_text = "*" + type_text
        return FieldDecl(names=names, type_text=type_text)

    def _interface_elems(self, interface_node: Node) -> Iterator[FieldDecl]:
        for child in self._interface_children(interface_node):
            if child.type == "comment":
                continue
            if child.type in METHOD_NODE_TYPES:
                name_node = child.child_by_field_name("name")
                name = self._node_text(name_node) if name_node else ""
                yield FieldDecl(names=(name,) if name else (), type_text="func" + self._signature_text(child))
            else:
                yield FieldDecl(names=(), type_text=self.type_text(child))

    def _interface_children(self, interface_node: Node) -> Iterator[Node]:
        for child in interface_node.named_children:
            if child.type == "method_spec_list":
                yield from child.named_children
            else:
                yield child

    def _func_decl(self, node: Node) -> FuncDeclNode:
        name_node = node.child_by_field_name("name")
        receiver: Optional[str] = None
        receiver_node = node.child_by_field_name("receiver")
        if receiver_node is not None:
            groups = self._param_groups(receiver_node)
            receiver = groups[0].type_text if groups else ""
        params_node = node.child_by_field_name("parameters")
        return FuncDeclNode(
            name=self._node_text(name_node) if name_node else "",
            receiver=receiver,
            params=self._param_groups(params_node) if params_node else (),
            results=self._result_groups(node.child_by_field_name("result")),
        )

    def _param_groups(self, param_list: Node) -> Tuple[ParamGroup, ...]:
        groups: List[ParamGroup] = []
        for child in param_list.named_children:
            if child.type not in PARAM_NODE_TYPES:
                continue
            names = tuple(self._node_text(name) for name in child.children_by_field_name("name"))
            type_text = self.type_text(child.child_by_field_name("type"))
            if child.type == "variadic_parameter_declaration":
                type_text = "..." + type_text
            groups.append(ParamGroup(names=names, type_text=type_text))
        return tuple(groups)

    def _result_groups(self, result: Optional[Node]) -> Tuple[ResultGroup, ...]:
        if result is None:
            return ()
        if result.type != "parameter_list":
            return (ResultGroup(name=None, type_text=self.type_text(result)),)
        return tuple(
            ResultGroup(name=group.names[0] if group.names else None, type_text=group.type_text)
            for group in self._param_groups(result)
        )

    # --- type rendering ---------------------------------------------------
    def type_text(self, node: Optional[Node]) -> str:
        """Render a type expression on a single line in canonical Go form."""
        if node is None:
            return ""
        kind = node.type
        if kind in IDENTIFIER_NODE_TYPES:
            return self._node_text(node)
        if kind == "qualified_type":
            package = node.child_by_field_name("package")
            name = node.child_by_field_name("name")
            return f"{self.type_text(package)}.{self.type_text(name)}"
        if kind == "pointer_type":
            return "*" + self.type_text(self._first_named(node))
        if kind == "parenthesized_type":
            return "(" + self.type_text(self._first_named(node)) + ")"
        if kind == "negated_type":
            return "~" + self.type_text(self._first_named(node))
        if kind == "slice_type":
            return "[]" + self.type_text(node.child_by_field_name("element"))
        if kind == "array_type":
            length = node.child_by_field_name("length")
            element = node.child_by_field_name("element")
            return f"[{self._collapsed_text(length)}]{self.type_text(element)}"
        if kind == "implicit_length_array_type":
            return "[...]" + self.type_text(node.child_by_field_name("element"))
        if kind == "map_type":
            key = node.child_by_field_name("key")
            value = node.child_by_field_name("value")
            return f"map[{self.type_text(key)}]{self.type_text(value)}"
        if kind == "channel_type":
            return self._channel_prefix(node) + self.type_text(node.child_by_field_name("value"))
        if kind == "function_type":
            return "func" + self._signature_text(node)
        if kind == "generic_type":
            base = self.type_text(node.child_by_field_name("type"))
            arguments = node.child_by_field_name("type_arguments")
            if arguments is None:
                return base
            rendered = [
                self.type_text(arg) for arg in arguments.named_children if arg.type != "comment"
            ]
            return f"{base}[{', '.join(rendered)}]"
        if kind in {"type_elem", "constraint_elem"}:
            return " | ".join(
                self.type_text(child) for child in node.named_children if child.type != "comment"
            )
        if kind == "struct_type":
            parts = []
            for field in self._struct_fields(node):
                decl = self._field_decl(field)
                if decl.names:
                    parts.append(f"{', '.join(decl.names)} {decl.type_text}")
                else:
                    parts.append(decl.type_text)
            return "struct{" + "; ".join(parts) + "}"
        if kind == "interface_type":
            parts = []
            for decl in self._interface_elems(node):
                if decl.names:
                    # methods print as Name(params) results, without the func keyword
                    parts.append(decl.names[0] + decl.type_text[len("func"):])
                else:
                    parts.append(decl.type_text)
            return "interface{" + "; ".join(parts) + "}"
        return self._collapsed_text(node)

    def _signature_text(self, node: Node) -> str:
        params_node = node.child_by_field_name("parameters")
        params = self._param_groups(params_node) if params_node else ()
        text = f"({self._group_list_text(params)})"
        result = node.child_by_field_name("result")
        if result is None:
            return text
        if result.type != "parameter_list":
            return f"{text} {self.type_text(result)}"
        results = self._param_groups(result)
        if not results:
            return text
        if len(results) == 1 and not results[0].names:
            return f"{text} {results[0].type_text}"
        return f"{text} ({self._group_list_text(results)})"

    def _group_list_text(self, groups: Tuple[ParamGroup, ...]) -> str:
        parts = []
        for group in groups:
            if group.names:
                parts.append(f"{', '.join(group.names)} {group.type_text}")
            else:
                parts.append(group.type_text)
        return ", ".join(parts)

    def _channel_prefix(self, node: Node) -> str:
        tokens = [child.type for child in node.children if not child.is_named]
        if tokens and tokens[0] == "<-":
            return "<-chan "
        if "<-" in tokens:
            return "chan<- "
        return "chan "

    # --- helpers ------------------------------------------------------------
    def _first_named(self, node: Node) -> Optional[Node]:
        for child in node.named_children:
            if child.type != "comment":
                return child
        return None

    def _node_text(self, node: Node) -> str:
        return self._source_bytes[node.start_byte : node.end_byte].decode("utf-8")

    def _collapsed_text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return " ".join(self._node_text(node).split())

    def _iterate(self, node: Node) -> Iterator[Node]:
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))


class GoSyntaxProvider:
    """Parse Go source text with tree-sitter."""

    language = "go"

    def __init__(self) -> None:
        self._language = Language(go_language())
        self._parser = Parser(self._language)

    def parse(self, source: str) -> GoSyntaxTree:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return GoSyntaxTree(tree.root_node, source_bytes)
