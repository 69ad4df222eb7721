"""Workspace tree walking for the symbol indexer."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from utils import is_source_file

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

DEFAULT_SKIP_DIRS = ("node_modules", "vendor")


def _should_prune_dir(name: str, skip_dirs: frozenset[str]) -> bool:
    """Check if a directory subtree is excluded from the walk entirely."""
    return name.startswith(".") or name in skip_dirs


def _build_gitignore_matcher(root: Path) -> Callable[[str], bool] | None:
    gitignore_path = root / ".gitignore"
    if not gitignore_path.is_file() or gitignore_path.is_symlink():
        return None
    return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))


def _sorted_entries(directory: str) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError:
        # Unreadable directories contribute nothing; the walk goes on.
        return []


def _walk(
    directory: str,
    skip_dirs: frozenset[str],
    gitignore_matches: Callable[[str], bool] | None,
) -> Iterator[str]:
    for entry in _sorted_entries(directory):
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                if _should_prune_dir(entry.name, skip_dirs):
                    continue
                yield from _walk(entry.path, skip_dirs, gitignore_matches)
                continue
        except OSError:
            continue

        if not is_source_file(entry.name):
            continue
        if gitignore_matches is not None and gitignore_matches(entry.path):
            continue
        yield entry.path


def find_source_files(
    directory: Path,
    *,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    respect_gitignore: bool = False,
) -> Iterator[str]:
    """Find all Go source files under a workspace root.

    Entries are visited in lexical order within each directory, and
    subdirectories are descended at their sorted position, so the yield
    order is stable for a given tree.

    Args:
        directory: Workspace root to walk
        skip_dirs: Directory names whose subtrees are never descended
            into, in addition to any name beginning with ``.``
        respect_gitignore: Skip files matched by the root ``.gitignore``

    Yields:
        Absolute path strings of each source file found.
    """
    gitignore_matches = (
        _build_gitignore_matcher(directory) if respect_gitignore else None
    )
    yield from _walk(
        os.path.abspath(directory), frozenset(skip_dirs), gitignore_matches
    )


__all__ = ["DEFAULT_SKIP_DIRS", "find_source_files"]
