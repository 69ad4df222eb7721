"""Configuration and persisted state for the editor backend."""

from config.settings import (
    ConfigError,
    EditorConfig,
    IndexConfig,
    ToolchainConfig,
    load_config,
    resolve_state_path,
)
from config.state import EditorState, load_state, save_state

__all__ = [
    "ConfigError",
    "EditorConfig",
    "EditorState",
    "IndexConfig",
    "ToolchainConfig",
    "load_config",
    "load_state",
    "resolve_state_path",
    "save_state",
]
