from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Type

from ..models.records import FileReport
from .go_syntax import (
    ContractShape,
    FuncDeclNode,
    GoSyntaxTree,
    ImportNode,
    OtherNode,
    RecordShape,
    SyntaxNode,
    TypeDeclNode,
)
from .signatures import format_member, format_signature

QUOTE_CHARS = "\"`"


@dataclass(slots=True)
class _ReportBuilder:
    file_path: str
    imports: List[str] = field(default_factory=list)
    structs: Dict[str, List[str]] = field(default_factory=dict)
    interfaces: Optional[Dict[str, List[str]]] = None
    funcs: List[str] = field(default_factory=list)

    def build(self) -> FileReport:
        interfaces = None
        if self.interfaces is not None:
            interfaces = {name: tuple(members) for name, members in self.interfaces.items()}
        return FileReport(
            file_path=self.file_path,
            imports=tuple(self.imports),
            structs={name: tuple(fields) for name, fields in self.structs.items()},
            interfaces=interfaces,
            funcs=tuple(self.funcs),
        )


def _handle_import(node: ImportNode, report: _ReportBuilder) -> None:
    report.imports.append(node.path.strip(QUOTE_CHARS))


def _handle_type_decl(node: TypeDeclNode, report: _ReportBuilder) -> None:
    shape = node.shape
    if isinstance(shape, RecordShape):
        fields = report.structs.setdefault(node.name, [])
        for decl in shape.fields:
            if not decl.names:
                continue
            fields.append(format_member(decl.names[0], decl.type_text))
    elif isinstance(shape, ContractShape):
        if report.interfaces is None:
            report.interfaces = {}
        methods = report.interfaces.setdefault(node.name, [])
        for decl in shape.methods:
            if not decl.names:
                continue
            methods.append(format_member(decl.names[0], decl.type_text))


def _handle_func_decl(node: FuncDeclNode, report: _ReportBuilder) -> None:
    report.funcs.append(format_signature(node))


def _handle_other(node: OtherNode, report: _ReportBuilder) -> None:
    return None


HANDLERS: Dict[Type, Callable[[SyntaxNode, _ReportBuilder], None]] = {
    ImportNode: _handle_import,
    TypeDeclNode: _handle_type_decl,
    FuncDeclNode: _handle_func_decl,
    OtherNode: _handle_other,
}


def extract_nodes(nodes: Iterable[SyntaxNode], file_path: str) -> FileReport:
    report = _ReportBuilder(file_path=file_path)
    for node in nodes:
        handler = HANDLERS.get(type(node))
        if handler is None:
            raise TypeError(f"No handler for syntax node {type(node).__name__}")
        handler(node, report)
    return report.build()


def extract(tree: GoSyntaxTree, file_path: str) -> FileReport:
    """Collect imports, structs, interfaces and function signatures in one pass.

    The tree is consumed as parsed; checking for syntax errors first is the
    caller's job.
    """
    return extract_nodes(tree.walk(), file_path)
