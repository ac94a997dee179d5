"""Configuration for gosymex.

Settings are optional; every command works with the defaults:
- include_tests / include_mocks: directory describe filters for *_test.go and *_mock.go
- show_all_deps: list indirect dependencies in project detection
- manifest_name: file that marks a Go project root
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_NAME = "gosymex.yaml"


class Settings(BaseModel):
    """gosymex settings."""

    include_tests: bool = Field(
        default=False,
        description="Describe *_test.go files when walking a directory",
    )
    include_mocks: bool = Field(
        default=False,
        description="Describe *_mock.go files when walking a directory",
    )
    show_all_deps: bool = Field(
        default=False,
        description="Show indirect dependencies when detecting a project",
    )
    manifest_name: str = Field(default="go.mod", min_length=1)
    source_suffix: str = Field(default=".go", min_length=1)
    ignored_dirs: List[str] = Field(default_factory=lambda: [".git"])
    json_indent: int = Field(default=2, ge=0)

    @field_validator("ignored_dirs", mode="before")
    def _normalize_dirs(cls, value: Optional[List[str]]) -> List[str]:
        if value is None:
            return []
        normalized = []
        for entry in value:
            cleaned = str(entry).strip().strip("/\\")
            if cleaned:
                normalized.append(cleaned)
        return normalized


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML if present, otherwise use defaults."""
    path = config_path or Path.cwd() / DEFAULT_CONFIG_NAME
    if path.exists():
        data = yaml.safe_load(path.read_text()) or {}
    else:
        data = {}
    return Settings(**data)
