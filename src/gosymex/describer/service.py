from __future__ import annotations

from pathlib import Path

from ..config import Settings
from ..errors import GosymexError, PathAccessError, SourceSyntaxError, UnsupportedFileError
from ..logging import get_logger
from ..models.records import DescribeFailure, DescribeResult, FileReport
from .extractor import extract
from .files import iter_go_files
from .go_syntax import GoSyntaxProvider

logger = get_logger("describe")


class DescribeService:
    def __init__(self, settings: Settings, provider: GoSyntaxProvider | None = None) -> None:
        self.settings = settings
        self.provider = provider or GoSyntaxProvider()

    # --- public API ---
    def describe_path(self, path: Path) -> DescribeResult:
        """Describe a single file, or every Go source below a directory.

        Failures are collected per file; one bad file never stops the walk.
        """
        result = DescribeResult()
        if path.is_dir():
            files = iter_go_files(
                path,
                include_tests=self.settings.include_tests,
                include_mocks=self.settings.include_mocks,
                suffix=self.settings.source_suffix,
                ignored_dirs=self.settings.ignored_dirs,
            )
        else:
            files = iter([path])
        for file_path in files:
            try:
                result.reports.append(self.describe_file(file_path))
            except GosymexError as exc:
                logger.warning("%s", exc)
                result.failures.append(DescribeFailure(path=file_path, error=exc))
        return result

    def describe_file(self, path: Path) -> FileReport:
        if path.suffix != self.settings.source_suffix:
            raise UnsupportedFileError(str(path))
        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SourceSyntaxError(str(path), "invalid UTF-8 encoding") from exc
        except OSError as exc:
            raise PathAccessError(path, exc.strerror or str(exc)) from exc
        return self.describe_source(source, str(path))

    def describe_source(self, source: str, file_path: str) -> FileReport:
        logger.debug("Describing %s", file_path)
        tree = self.provider.parse(source)
        if tree.has_error:
            raise SourceSyntaxError(file_path, "syntax error", line=tree.first_error_line())
        return extract(tree, file_path)
