"""Errors surfaced by gosymex operations.

Extraction itself never raises for odd declarations (embedded fields,
unnamed results); these exceptions cover the failures a caller has to see:
unreadable paths, sources tree-sitter could not parse cleanly, and manifest
lookup or parsing problems.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class GosymexError(Exception):
    """Base class for all gosymex failures."""


class PathAccessError(GosymexError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error accessing path '{path}': {reason}")


class SourceSyntaxError(GosymexError):
    def __init__(self, path: str, detail: str, line: Optional[int] = None) -> None:
        self.path = path
        self.detail = detail
        self.line = line
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"Error parsing file {location}: {detail}")


class UnsupportedFileError(SourceSyntaxError):
    def __init__(self, path: str) -> None:
        super().__init__(path, "not a Go file")


class ManifestNotFoundError(GosymexError):
    def __init__(self, start: Path, manifest_name: str) -> None:
        self.start = start
        self.manifest_name = manifest_name
        super().__init__(
            f"'{start}' is not a Go project. No {manifest_name} file found."
        )


class ManifestParseError(GosymexError):
    def __init__(self, path: str, detail: str, line: Optional[int] = None) -> None:
        self.path = path
        self.line = line
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"Error parsing {location}: {detail}")
