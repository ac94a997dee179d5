from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

from ..logging import get_logger

TEST_SUFFIX = "_test.go"
MOCK_SUFFIX = "_mock.go"

logger = get_logger("files")


def is_go_source(
    path: Path | str,
    include_tests: bool = False,
    include_mocks: bool = False,
    suffix: str = ".go",
) -> bool:
    name = os.path.basename(str(path))
    if not name.endswith(suffix):
        return False
    if not include_tests and name.endswith(TEST_SUFFIX):
        return False
    if not include_mocks and name.endswith(MOCK_SUFFIX):
        return False
    return True


def iter_go_files(
    root: Path,
    include_tests: bool = False,
    include_mocks: bool = False,
    suffix: str = ".go",
    ignored_dirs: Iterable[str] = (".git",),
) -> Iterator[Path]:
    """Yield Go sources under ``root`` in lexical walk order."""
    skip = set(ignored_dirs)

    def _on_error(exc: OSError) -> None:
        logger.warning("Error walking %s: %s", exc.filename, exc.strerror or exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for filename in sorted(filenames):
            if is_go_source(filename, include_tests, include_mocks, suffix):
                yield Path(dirpath) / filename
