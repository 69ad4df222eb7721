from __future__ import annotations

import os
from typing import TYPE_CHECKING

from resolve.imports import resolve_import

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_relative_specifier_probes_extensions(tmp_path: Path) -> None:
    base = _touch(tmp_path / "a" / "b" / "c.go")
    target = _touch(tmp_path / "a" / "b" / "d.go")

    assert resolve_import(str(base), "./d", str(tmp_path)) == str(target)


def test_relative_specifier_falls_back_to_index_file(tmp_path: Path) -> None:
    base = _touch(tmp_path / "a" / "b" / "c.go")
    index_file = _touch(tmp_path / "a" / "b" / "d" / "index.go")

    assert resolve_import(str(base), "./d", str(tmp_path)) == str(index_file)


def test_relative_specifier_not_found(tmp_path: Path) -> None:
    base = _touch(tmp_path / "a" / "b" / "c.go")
    (tmp_path / "a" / "b" / "d").mkdir()

    assert resolve_import(str(base), "./d", str(tmp_path)) is None


def test_exact_file_wins_over_extension(tmp_path: Path) -> None:
    base = _touch(tmp_path / "main.ts")
    exact = _touch(tmp_path / "data.json")
    _touch(tmp_path / "data.json.ts")

    assert resolve_import(str(base), "./data.json", str(tmp_path)) == str(exact)


def test_parent_relative_specifier(tmp_path: Path) -> None:
    base = _touch(tmp_path / "web" / "src" / "pages" / "Home.tsx")
    target = _touch(tmp_path / "web" / "src" / "api.ts")

    assert resolve_import(str(base), "../api", str(tmp_path)) == str(target)


def test_alias_checks_root_before_src(tmp_path: Path) -> None:
    base = _touch(tmp_path / "src" / "main.ts")
    in_root = _touch(tmp_path / "x.ts")
    _touch(tmp_path / "src" / "x.ts")

    assert resolve_import(str(base), "@/x", str(tmp_path)) == str(in_root)


def test_alias_falls_back_to_src(tmp_path: Path) -> None:
    base = _touch(tmp_path / "src" / "main.ts")
    in_src = _touch(tmp_path / "src" / "components" / "App.tsx")

    resolved = resolve_import(str(base), "@/components/App", str(tmp_path))

    assert resolved == str(in_src)


def test_alias_without_workspace_is_not_found(tmp_path: Path) -> None:
    base = _touch(tmp_path / "main.ts")
    _touch(tmp_path / "x.ts")

    assert resolve_import(str(base), "@/x", None) is None


def test_bare_specifier_prefers_base_directory(tmp_path: Path) -> None:
    base = _touch(tmp_path / "pkg" / "main.go")
    local = _touch(tmp_path / "pkg" / "util.go")
    _touch(tmp_path / "util.go")

    assert resolve_import(str(base), "util", str(tmp_path)) == str(local)


def test_bare_specifier_falls_back_to_workspace_root(tmp_path: Path) -> None:
    base = _touch(tmp_path / "pkg" / "main.go")
    rooted = _touch(tmp_path / "lib" / "helpers.js")

    assert resolve_import(str(base), "lib/helpers", str(tmp_path)) == str(rooted)
    assert resolve_import(str(base), "lib/helpers", None) is None


def test_directories_never_match(tmp_path: Path) -> None:
    base = _touch(tmp_path / "main.go")
    (tmp_path / "models").mkdir()

    assert resolve_import(str(base), "models", str(tmp_path)) is None


def test_resolved_path_is_normalized(tmp_path: Path) -> None:
    base = _touch(tmp_path / "a" / "main.go")
    target = _touch(tmp_path / "b" / "util.go")

    resolved = resolve_import(str(base), "./../b/util", str(tmp_path))

    assert resolved == os.path.normpath(str(target))
