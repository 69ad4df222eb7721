"""Shared utilities for the editor backend."""

from __future__ import annotations

import os
from pathlib import Path

SOURCE_EXTENSION = ".go"


def is_within_root(path: str | Path, root: str | Path) -> bool:
    """Return True when the resolved path stays within the resolved root.

    Examples:
        >>> is_within_root("/work/pkg/main.go", "/work")
        True
        >>> is_within_root("/workshop/main.go", "/work")
        False
    """
    try:
        root_resolved = Path(root).resolve()
        path_resolved = Path(path).resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def is_source_file(path: str | Path) -> bool:
    """Return True for files the symbol indexer parses."""
    return str(path).endswith(SOURCE_EXTENSION)


def is_regular_file(path: str) -> bool:
    """Return True when ``path`` exists and is not a directory."""
    try:
        return os.path.exists(path) and not os.path.isdir(path)
    except (OSError, ValueError):
        return False
