"""Shared fixtures for gosymex tests."""
from pathlib import Path
from typing import Callable

import pytest

from gosymex.config import Settings
from gosymex.describer.go_syntax import GoSyntaxProvider
from gosymex.describer.service import DescribeService

FIXTURES = Path(__file__).parent / "fixtures" / "go"

GO_MOD = """\
module example.com/demo

go 1.22

require github.com/spf13/cobra v1.8.0

require (
\tgithub.com/spf13/pflag v1.0.5 // indirect
\tgolang.org/x/mod v0.14.0
)
"""


def fixture_path(name: str) -> Path:
    return FIXTURES / name


def load_fixture(name: str) -> str:
    return fixture_path(name).read_text()


@pytest.fixture(scope="session")
def provider() -> GoSyntaxProvider:
    return GoSyntaxProvider()


@pytest.fixture
def service(provider: GoSyntaxProvider) -> DescribeService:
    return DescribeService(Settings(), provider=provider)


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write Go source under tmp_path, creating parent directories."""
    def _write(relative: str, source: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
        return path
    return _write


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """A small Go module with one nested package."""
    root = tmp_path / "demo"
    (root / "internal" / "util").mkdir(parents=True)
    (root / "go.mod").write_text(GO_MOD)
    (root / "internal" / "util" / "util.go").write_text("package util\n\nfunc Helper() {}\n")
    return root
