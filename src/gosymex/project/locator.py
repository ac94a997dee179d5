from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import ManifestNotFoundError, PathAccessError
from ..logging import get_logger
from ..models.records import ProjectInfo
from .gomod import GoModParser

logger = get_logger("locator")


def find_manifest(path: Path, manifest_name: str = "go.mod") -> Path:
    """Return the nearest ``manifest_name`` at or above ``path``.

    A regular file starts the search in its own directory.
    """
    try:
        start = path.expanduser().resolve(strict=True)
    except OSError as exc:
        raise PathAccessError(path, exc.strerror or str(exc)) from exc
    current = start.parent if start.is_file() else start
    while True:
        candidate = current / manifest_name
        logger.debug("Looking for %s", candidate)
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    raise ManifestNotFoundError(path, manifest_name)


def detect_project(
    path: Path,
    manifest_name: str = "go.mod",
    parser: Optional[GoModParser] = None,
) -> ProjectInfo:
    manifest_path = find_manifest(path, manifest_name)
    manifest = (parser or GoModParser()).parse(manifest_path)
    return ProjectInfo(
        root=manifest_path.parent,
        manifest_path=manifest_path,
        module_path=manifest.module_path,
        go_version=manifest.go_version,
        dependencies=manifest.requirements,
    )
