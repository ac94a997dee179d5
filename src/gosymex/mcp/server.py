"""MCP server exposing gosymex to coding agents.

Tools:
- describe: imports, structs, interfaces and function signatures of Go files
- detect_project: enclosing Go module and its direct/indirect dependencies
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, Optional

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ..config import Settings, load_settings
from ..describer.service import DescribeService
from ..errors import GosymexError
from ..project import classify, detect_project

server = Server("gosymex-mcp")
runtime_settings: Optional[Settings] = None


def _json_text(payload: Any) -> TextContent:
    return TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))


def _get_settings() -> Settings:
    if runtime_settings is None:
        raise RuntimeError("MCP server has not been initialized with settings.")
    return runtime_settings


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    return [
        Tool(
            name="describe",
            description="Describe a Go file or every Go file below a directory: imports, structs, interfaces and function signatures.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Go source file or directory.",
                    },
                    "include_tests": {
                        "type": "boolean",
                        "description": "Include *_test.go files when walking a directory.",
                        "default": False,
                    },
                    "include_mocks": {
                        "type": "boolean",
                        "description": "Include *_mock.go files when walking a directory.",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="detect_project",
            description="Find the go.mod enclosing a path and report module path and dependencies.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "File or directory inside the project.",
                    },
                    "all_deps": {
                        "type": "boolean",
                        "description": "If true, list indirect dependencies under 'visible' too.",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        ),
    ]


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any]
) -> list[TextContent]:
    settings = _get_settings()

    if name == "describe":
        path = arguments.get("path")
        if not path:
            raise ValueError("path is required")

        overrides = settings.model_copy(
            update={
                "include_tests": bool(arguments.get("include_tests", settings.include_tests)),
                "include_mocks": bool(arguments.get("include_mocks", settings.include_mocks)),
            }
        )
        result = DescribeService(overrides).describe_path(Path(path).expanduser())
        return [
            _json_text(
                {
                    "reports": [report.to_dict() for report in result.reports],
                    "failures": [failure.to_dict() for failure in result.failures],
                }
            )
        ]

    if name == "detect_project":
        path = arguments.get("path")
        if not path:
            raise ValueError("path is required")

        show_all = bool(arguments.get("all_deps", settings.show_all_deps))
        try:
            project = detect_project(Path(path).expanduser(), settings.manifest_name)
        except GosymexError as exc:
            return [_json_text({"error": str(exc)})]

        partition = classify(project.dependencies)
        return [
            _json_text(
                {
                    "root": str(project.root),
                    "name": project.name,
                    "module_path": project.module_path,
                    "go_version": project.go_version,
                    "direct": [dep.to_dict() for dep in partition.direct],
                    "indirect": [dep.to_dict() for dep in partition.indirect],
                    "visible": [dep.to_dict() for dep in partition.visible(show_all)],
                }
            )
        ]

    raise ValueError(f"Unknown tool: {name}")


async def _main(settings: Settings) -> None:
    global runtime_settings
    runtime_settings = settings
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="gosymex-mcp",
                server_version="0.2.0",
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def run_server() -> None:
    parser = argparse.ArgumentParser(description="gosymex MCP server")
    parser.add_argument("--config", type=Path, help="Path to gosymex.yaml")
    args = parser.parse_args()
    asyncio.run(_main(load_settings(args.config)))
