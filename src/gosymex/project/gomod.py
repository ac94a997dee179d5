from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import ManifestParseError
from ..logging import get_logger
from ..models.records import Dependency, GoModManifest

logger = get_logger("gomod")

TOKEN_RE = re.compile(r'"(?:[^"\\]|\\.)*"|`[^`]*`|\S+')

# Directives that are legal in go.mod but carry nothing the project report shows.
IGNORED_DIRECTIVES = {"toolchain", "godebug", "replace", "exclude", "retract", "tool", "ignore"}

BLOCK_DIRECTIVES = {"require", "replace", "exclude", "retract", "godebug", "tool", "ignore"}


@dataclass(slots=True)
class _ManifestState:
    module_path: Optional[str] = None
    go_version: Optional[str] = None
    requirements: List[Dependency] = field(default_factory=list)


class GoModParser:
    """Parse go.mod files into module path, go version and requirements."""

    def parse(self, path: Path) -> GoModManifest:
        logger.info("Reading go.mod file: %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestParseError(str(path), f"unable to read file ({exc})") from exc
        return self.parse_text(text, str(path))

    def parse_text(self, text: str, name: str = "go.mod") -> GoModManifest:
        state = _ManifestState()
        block: Optional[str] = None
        block_start = 0
        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            code, comment = _split_comment(raw_line)
            tokens = [_unquote(token) for token in TOKEN_RE.findall(code)]
            if not tokens:
                continue
            if block is not None:
                if tokens == [")"]:
                    block = None
                    continue
                self._directive(state, block, tokens, comment, name, lineno)
                continue
            verb, args = tokens[0], tokens[1:]
            if verb in BLOCK_DIRECTIVES and args == ["("]:
                block = verb
                block_start = lineno
                continue
            if verb in BLOCK_DIRECTIVES and args == ["()"]:
                continue
            self._directive(state, verb, args, comment, name, lineno)
        if block is not None:
            raise ManifestParseError(name, f"unterminated {block} block", line=block_start)
        if not state.module_path:
            raise ManifestParseError(name, "no module directive found")
        return GoModManifest(
            module_path=state.module_path,
            go_version=state.go_version,
            requirements=tuple(state.requirements),
        )

    # --- directive handlers ----------------------------------------------
    def _directive(
        self,
        state: _ManifestState,
        verb: str,
        args: List[str],
        comment: Optional[str],
        name: str,
        lineno: int,
    ) -> None:
        if verb == "module":
            if len(args) != 1:
                raise ManifestParseError(name, "usage: module module/path", line=lineno)
            if state.module_path is not None:
                raise ManifestParseError(name, "repeated module statement", line=lineno)
            state.module_path = args[0]
        elif verb == "go":
            if len(args) != 1:
                raise ManifestParseError(name, "usage: go 1.23", line=lineno)
            state.go_version = args[0]
        elif verb == "require":
            if len(args) != 2:
                raise ManifestParseError(
                    name, "usage: require module/path v1.2.3", line=lineno
                )
            state.requirements.append(
                Dependency(name=args[0], version=args[1], indirect=_is_indirect(comment))
            )
        elif verb in IGNORED_DIRECTIVES:
            return
        else:
            raise ManifestParseError(name, f"unknown directive: {verb}", line=lineno)


def _split_comment(line: str) -> Tuple[str, Optional[str]]:
    quote: Optional[str] = None
    index = 0
    while index < len(line):
        char = line[index]
        if quote:
            if char == "\\" and quote == '"':
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in "\"`":
            quote = char
        elif line.startswith("//", index):
            return line[:index], line[index + 2 :]
        index += 1
    return line, None


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"`":
        return token[1:-1]
    return token


def _is_indirect(comment: Optional[str]) -> bool:
    if comment is None:
        return False
    text = comment.strip()
    return text == "indirect" or text.startswith("indirect;")
