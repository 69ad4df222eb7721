"""Toolchain binary discovery."""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from toolchain.platform import current_platform
from utils import is_regular_file

if TYPE_CHECKING:
    from collections.abc import Mapping

    from toolchain.platform import PlatformProfile

EXECUTABLE_NAME = "go"
ROOT_OVERRIDE_KEY = "GOROOT"


def _check_candidate(path: str, platform: PlatformProfile) -> str | None:
    candidate = platform.executable(path)
    if is_regular_file(candidate):
        return candidate
    return None


def _iter_local_candidates(cwd: str) -> list[str]:
    """Candidate paths for a toolchain unpacked next to the editor.

    ``<cwd>/go/bin/go`` first, then for each immediate subdirectory
    ``<sub>/go/bin/go`` and ``<sub>/bin/go`` (the subdirectory may
    itself be a toolchain root).
    """
    candidates = [os.path.join(cwd, "go", "bin", EXECUTABLE_NAME)]
    try:
        with os.scandir(cwd) as it:
            subdirs = sorted(
                entry.path for entry in it if entry.is_dir(follow_symlinks=False)
            )
    except OSError:
        subdirs = []
    for subdir in subdirs:
        candidates.append(os.path.join(subdir, "go", "bin", EXECUTABLE_NAME))
        candidates.append(os.path.join(subdir, "bin", EXECUTABLE_NAME))
    return candidates


def find_executable(
    *,
    cwd: str | None = None,
    platform: PlatformProfile | None = None,
) -> str:
    """Search bundled, workspace-local and system locations for ``go``.

    Never fails: when nothing is found the bare executable name is
    returned and the failure surfaces when execution is attempted.
    """
    platform = platform or current_platform()
    if cwd is None:
        try:
            cwd = os.getcwd()
        except OSError:
            return EXECUTABLE_NAME

    for candidate in _iter_local_candidates(cwd):
        found = _check_candidate(candidate, platform)
        if found:
            return found

    on_path = shutil.which(EXECUTABLE_NAME)
    if on_path:
        return on_path

    return EXECUTABLE_NAME


def locate(
    overrides: Mapping[str, str] | None = None,
    *,
    cwd: str | None = None,
    platform: PlatformProfile | None = None,
) -> str:
    """Return the toolchain executable path.

    A non-empty ``GOROOT`` override yields ``<GOROOT>/bin/go`` without
    any existence check; otherwise ``find_executable`` searches.
    """
    root = (overrides or {}).get(ROOT_OVERRIDE_KEY)
    if root:
        return os.path.join(root, "bin", EXECUTABLE_NAME)
    return find_executable(cwd=cwd, platform=platform)


__all__ = ["EXECUTABLE_NAME", "ROOT_OVERRIDE_KEY", "find_executable", "locate"]
