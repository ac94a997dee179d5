from __future__ import annotations

from typing import List

from .go_syntax import FuncDeclNode, ParamGroup, ResultGroup


def format_member(name: str, type_text: str) -> str:
    return f"{name} {type_text}"


def format_signature(decl: FuncDeclNode) -> str:
    """Render a function or method header.

    ``(*T).F(a int, b string) returns (ok bool)``; the receiver prefix and the
    ``returns`` suffix are only present when the declaration has them.
    """
    parts: List[str] = []
    if decl.receiver is not None:
        parts.append(f"({decl.receiver}).")
    parts.append(f"{decl.name}(")
    parts.append(", ".join(_param_group_text(group) for group in decl.params))
    parts.append(")")
    if decl.results:
        parts.append(" returns (")
        parts.append(", ".join(_result_group_text(group) for group in decl.results))
        parts.append(")")
    return "".join(parts)


def _param_group_text(group: ParamGroup) -> str:
    if not group.names:
        return group.type_text
    # the type repeats once per name: "a int, b int" for "a, b int"
    return ", ".join(format_member(name, group.type_text) for name in group.names)


def _result_group_text(group: ResultGroup) -> str:
    if group.name:
        return format_member(group.name, group.type_text)
    return group.type_text
