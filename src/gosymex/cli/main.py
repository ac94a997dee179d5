"""gosymex CLI: describe Go sources and detect Go projects."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Settings, load_settings
from ..describer.service import DescribeService
from ..errors import GosymexError, ManifestNotFoundError
from ..logging import configure_logging
from ..models.records import Dependency
from ..project import classify, detect_project

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
app = typer.Typer(add_completion=False, no_args_is_help=True)


def _resolve_settings(
    config_path: Optional[Path],
    include_tests: bool = False,
    include_mocks: bool = False,
    all_deps: bool = False,
) -> Settings:
    settings = load_settings(config_path)
    if include_tests:
        settings.include_tests = True
    if include_mocks:
        settings.include_mocks = True
    if all_deps:
        settings.show_all_deps = True
    return settings


@app.command()
def describe(
    path: Path = typer.Argument(..., help="Go file or directory to describe"),
    include_tests: bool = typer.Option(
        False, "--include-tests", "-t", help="Include *_test.go files in the recursive describe"
    ),
    include_mocks: bool = typer.Option(
        False, "--include-mocks", "-m", help="Include *_mock.go files in the recursive describe"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to gosymex.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Describe a Go file, or every Go file below a directory, as JSON."""
    configure_logging(verbose=verbose)
    settings = _resolve_settings(config, include_tests=include_tests, include_mocks=include_mocks)

    if not path.exists():
        err_console.print(f"[red]Error accessing path:[/red] {escape(str(path))}")
        raise typer.Exit(1)

    service = DescribeService(settings)
    result = service.describe_path(path)

    for report in result.reports:
        typer.echo(report.to_json(indent=settings.json_indent))

    for failure in result.failures:
        err_console.print(
            f"[red]Error describing {escape(str(failure.path))}:[/red] {escape(failure.message)}"
        )

    if result.failures:
        raise typer.Exit(1)


@app.command()
def detect(
    path: Path = typer.Argument(..., help="File or directory inside a Go project"),
    all_deps: bool = typer.Option(False, "--all-deps", help="Show indirect dependencies too"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to gosymex.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Detect whether a path belongs to a Go project and report its module details."""
    configure_logging(verbose=verbose)
    settings = _resolve_settings(config, all_deps=all_deps)

    try:
        project = detect_project(path, settings.manifest_name)
    except ManifestNotFoundError as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(1)
    except GosymexError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    console.print(f"'{escape(str(project.root))}' is a Go project.")
    console.print("Project Details:")
    console.print(f"  Project Name: {escape(project.name)}")
    console.print(f"  Module Path: {escape(project.module_path)}")
    if project.go_version:
        console.print(f"  Go Version: {escape(project.go_version)}")

    if not project.dependencies:
        console.print("  No dependencies found.")
        return

    partition = classify(project.dependencies)
    visible = partition.visible(settings.show_all_deps)
    console.print(
        f"  Dependencies: {len(partition.direct)} direct, {len(partition.indirect)} indirect"
    )
    if visible:
        console.print(_dependency_table(visible))


def _dependency_table(dependencies: tuple[Dependency, ...]) -> Table:
    table = Table(title="Dependencies")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Indirect")

    for index, dep in enumerate(dependencies, start=1):
        table.add_row(
            str(index),
            escape(dep.name),
            escape(dep.version),
            "yes" if dep.indirect else "",
        )
    return table
