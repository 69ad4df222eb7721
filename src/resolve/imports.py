"""Heuristic import-specifier resolution for editor navigation."""

from __future__ import annotations

import os

from utils import is_regular_file

ALIAS_PREFIX = "@/"

# Probed in order; the first existing non-directory file wins.
RESOLVE_SUFFIXES = (
    "",
    ".go",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".json",
    "/index.go",
    "/index.ts",
    "/index.tsx",
    "/index.js",
)


def check_suffixes(candidate: str) -> str | None:
    """Return the first ``candidate + suffix`` that names a file.

    Examples:
        >>> check_suffixes("/nonexistent/module") is None
        True
    """
    for suffix in RESOLVE_SUFFIXES:
        test_path = candidate + suffix
        if is_regular_file(test_path):
            return test_path
    return None


def _join(directory: str, specifier: str) -> str:
    return os.path.normpath(os.path.join(directory, specifier))


def resolve_import(
    base_path: str,
    specifier: str,
    workspace_root: str | None,
) -> str | None:
    """Resolve an import specifier to a concrete file.

    Args:
        base_path: The file containing the import
        specifier: Import path as written in source (``./util``,
            ``@/components/App``, ``lib/helpers``)
        workspace_root: Active workspace root, if any

    Returns:
        Path of the resolved file, or None when nothing matches. No
        manifest or build configuration file is consulted.
    """
    if not specifier:
        return None

    base_dir = os.path.dirname(base_path)

    if specifier.startswith("."):
        return check_suffixes(_join(base_dir, specifier))

    if specifier.startswith(ALIAS_PREFIX):
        if not workspace_root:
            return None
        stripped = specifier[len(ALIAS_PREFIX) :]
        return check_suffixes(_join(workspace_root, stripped)) or check_suffixes(
            _join(os.path.join(workspace_root, "src"), stripped)
        )

    resolved = check_suffixes(_join(base_dir, specifier))
    if resolved is None and workspace_root:
        resolved = check_suffixes(_join(workspace_root, specifier))
    return resolved


__all__ = ["ALIAS_PREFIX", "RESOLVE_SUFFIXES", "check_suffixes", "resolve_import"]
