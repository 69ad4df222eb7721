"""Workspace file discovery."""

from scan.files import DEFAULT_SKIP_DIRS, find_source_files

__all__ = ["DEFAULT_SKIP_DIRS", "find_source_files"]
