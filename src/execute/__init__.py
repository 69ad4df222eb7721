"""Toolchain execution."""

from execute.models import (
    TOOLCHAIN_ENV_KEYS,
    CommandJob,
    RunJob,
    RunResult,
    ToolchainReport,
)
from execute.output import normalize_output
from execute.runner import Orchestrator, build_environment, command_argv

__all__ = [
    "TOOLCHAIN_ENV_KEYS",
    "CommandJob",
    "Orchestrator",
    "RunJob",
    "RunResult",
    "ToolchainReport",
    "build_environment",
    "command_argv",
    "normalize_output",
]
