from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

import toolchain.finder as finder_module
from toolchain.finder import find_executable, locate
from toolchain.platform import POSIX, WINDOWS

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return str(path)


@pytest.fixture
def no_system_go(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(finder_module.shutil, "which", lambda name: None)


def test_override_is_returned_without_existence_check(tmp_path: Path) -> None:
    goroot = tmp_path / "does-not-exist"

    assert locate({"GOROOT": str(goroot)}, cwd=str(tmp_path)) == os.path.join(
        str(goroot), "bin", "go"
    )


def test_empty_override_falls_through_to_search(
    tmp_path: Path, no_system_go: None
) -> None:
    bundled = _touch(tmp_path / "go" / "bin" / "go")

    assert locate({"GOROOT": ""}, cwd=str(tmp_path), platform=POSIX) == bundled


def test_bundled_toolchain_beats_subdirectories(
    tmp_path: Path, no_system_go: None
) -> None:
    bundled = _touch(tmp_path / "go" / "bin" / "go")
    _touch(tmp_path / "alpha" / "bin" / "go")

    assert find_executable(cwd=str(tmp_path), platform=POSIX) == bundled


def test_subdirectory_go_root_layouts(tmp_path: Path, no_system_go: None) -> None:
    nested = _touch(tmp_path / "tools" / "go" / "bin" / "go")
    _touch(tmp_path / "zeta" / "bin" / "go")

    assert find_executable(cwd=str(tmp_path), platform=POSIX) == nested


def test_subdirectory_that_is_itself_a_go_root(
    tmp_path: Path, no_system_go: None
) -> None:
    direct = _touch(tmp_path / "go1.22" / "bin" / "go")

    assert find_executable(cwd=str(tmp_path), platform=POSIX) == direct


def test_directory_candidates_are_skipped(tmp_path: Path, no_system_go: None) -> None:
    (tmp_path / "go" / "bin" / "go").mkdir(parents=True)

    assert find_executable(cwd=str(tmp_path), platform=POSIX) == "go"


def test_binary_suffix_applies_on_windows_profile(
    tmp_path: Path, no_system_go: None
) -> None:
    _touch(tmp_path / "go" / "bin" / "go")
    exe = _touch(tmp_path / "go" / "bin" / "go.exe")

    assert find_executable(cwd=str(tmp_path), platform=WINDOWS) == exe


def test_search_path_is_used_when_nothing_local(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        finder_module.shutil, "which", lambda name: f"/usr/local/bin/{name}"
    )

    assert find_executable(cwd=str(tmp_path), platform=POSIX) == "/usr/local/bin/go"


def test_bare_name_is_the_last_resort(tmp_path: Path, no_system_go: None) -> None:
    assert locate(None, cwd=str(tmp_path), platform=POSIX) == "go"


def test_package_exports_leave_finder_module_patchable() -> None:
    import toolchain

    assert toolchain.locate is locate
    assert finder_module.shutil.which is not None
