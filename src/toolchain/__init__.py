"""Toolchain discovery and host platform profiles."""

from toolchain.finder import (
    EXECUTABLE_NAME,
    ROOT_OVERRIDE_KEY,
    find_executable,
    locate,
)
from toolchain.platform import POSIX, WINDOWS, PlatformProfile, current_platform

__all__ = [
    "EXECUTABLE_NAME",
    "POSIX",
    "ROOT_OVERRIDE_KEY",
    "WINDOWS",
    "PlatformProfile",
    "current_platform",
    "find_executable",
    "locate",
]
