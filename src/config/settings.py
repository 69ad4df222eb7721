from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from scan.files import DEFAULT_SKIP_DIRS

CONFIG_FILENAME = "editor.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class IndexConfig(BaseModel):
    """Configuration for the background symbol indexer."""

    model_config = ConfigDict(extra="forbid")

    skip_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_DIRS),
        description="Directory names never descended into (dot-dirs always skipped)",
    )
    respect_gitignore: bool = Field(
        default=False,
        description="Skip files matched by the workspace root .gitignore",
    )

    @field_validator("skip_dirs")
    @classmethod
    def validate_skip_dirs(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or "/" in name or "\\" in name:
                msg = f"skip_dirs entries must be bare directory names, got '{name}'"
                raise ValueError(msg)
        return v


class ToolchainConfig(BaseModel):
    """Configuration for locating and running the Go toolchain."""

    model_config = ConfigDict(extra="forbid")

    root: str | None = Field(
        default=None,
        description="Default GOROOT used when a request supplies none",
    )
    max_concurrent_runs: int | None = Field(
        default=None,
        ge=1,
        description="Ceiling on concurrently running toolchain processes",
    )


class EditorConfig(BaseModel):
    """Configuration for the editor backend."""

    model_config = ConfigDict(extra="forbid")

    state_file: str = Field(
        default="editor_config.json",
        description="File persisting the last active workspace",
    )
    log_file: str | None = Field(
        default=None,
        description="Append log records to this file instead of stderr",
    )
    log_level: LogLevel = Field(default="INFO")
    index: IndexConfig = Field(default_factory=IndexConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(config_dir: Path) -> EditorConfig:
    """Load configuration from editor.toml if it exists."""
    config_path = Path(config_dir) / CONFIG_FILENAME

    if not config_path.is_file():
        return EditorConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return EditorConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def resolve_state_path(config_dir: Path, config: EditorConfig) -> Path:
    """Return the state file location; relative paths live in ``config_dir``."""
    state_path = Path(config.state_file).expanduser()
    if state_path.is_absolute():
        return state_path
    return Path(config_dir) / state_path
