from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class FileReport:
    """Declared surface of a single Go source file."""

    file_path: str
    imports: Tuple[str, ...] = ()
    structs: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    # None means no interface type was declared, which consumers tell apart from {}
    interfaces: Optional[Dict[str, Tuple[str, ...]]] = None
    funcs: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        interfaces = None
        if self.interfaces is not None:
            interfaces = {name: list(members) for name, members in self.interfaces.items()}
        return {
            "FilePath": self.file_path,
            "Imports": list(self.imports),
            "Structs": {name: list(fields) for name, fields in self.structs.items()},
            "Interfaces": interfaces,
            "Funcs": list(self.funcs),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class Dependency:
    name: str
    version: str
    indirect: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "version": self.version, "indirect": self.indirect}


@dataclass(frozen=True, slots=True)
class GoModManifest:
    module_path: str
    go_version: Optional[str] = None
    requirements: Tuple[Dependency, ...] = ()


@dataclass(frozen=True, slots=True)
class ProjectInfo:
    root: Path
    manifest_path: Path
    module_path: str
    go_version: Optional[str] = None
    dependencies: Tuple[Dependency, ...] = ()

    @property
    def name(self) -> str:
        return self.root.name


@dataclass(slots=True)
class DescribeFailure:
    path: Path
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)

    def to_dict(self) -> Dict[str, str]:
        return {"path": str(self.path), "error": self.message}


@dataclass(slots=True)
class DescribeResult:
    reports: List[FileReport] = field(default_factory=list)
    failures: List[DescribeFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
