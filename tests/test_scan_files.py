from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import find_source_files

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str = "package p\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _relative(root: Path, **kwargs: object) -> list[str]:
    return [
        os.path.relpath(path, root).replace(os.sep, "/")
        for path in find_source_files(root, **kwargs)  # type: ignore[arg-type]
    ]


def test_hidden_and_denylisted_dirs_are_pruned(tmp_path: Path) -> None:
    _write(tmp_path / "main.go")
    _write(tmp_path / ".git" / "hooks" / "hook.go")
    _write(tmp_path / ".cache" / "gen.go")
    _write(tmp_path / "vendor" / "dep" / "dep.go")
    _write(tmp_path / "node_modules" / "pkg" / "x.go")
    _write(tmp_path / "internal" / "vendor" / "nested.go")

    assert _relative(tmp_path) == ["main.go"]


def test_only_go_files_are_yielded(tmp_path: Path) -> None:
    _write(tmp_path / "main.go")
    _write(tmp_path / "README.md", "# readme\n")
    _write(tmp_path / "main_go.txt", "x\n")
    _write(tmp_path / "web" / "app.ts", "export {};\n")

    assert _relative(tmp_path) == ["main.go"]


def test_visit_order_descends_directories_in_lexical_position(tmp_path: Path) -> None:
    _write(tmp_path / "a.go")
    _write(tmp_path / "b" / "x.go")
    _write(tmp_path / "b.go")
    _write(tmp_path / "c" / "d" / "e.go")

    assert _relative(tmp_path) == ["a.go", "b/x.go", "b.go", "c/d/e.go"]


def test_custom_skip_dirs_replace_the_default_denylist(tmp_path: Path) -> None:
    _write(tmp_path / "vendor" / "dep.go")
    _write(tmp_path / "testdata" / "fixture.go")
    _write(tmp_path / ".hidden" / "still_skipped.go")

    assert _relative(tmp_path, skip_dirs=["testdata"]) == ["vendor/dep.go"]


def test_root_gitignore_is_honored_when_enabled(tmp_path: Path) -> None:
    _write(tmp_path / "main.go")
    _write(tmp_path / "gen" / "zz_generated.go")
    (tmp_path / ".gitignore").write_text("zz_*.go\n", encoding="utf-8")

    assert _relative(tmp_path) == ["gen/zz_generated.go", "main.go"]
    assert _relative(tmp_path, respect_gitignore=True) == ["main.go"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_dirs_are_not_followed(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "pkg" / "module.go")

    external_root = tmp_path / "external"
    _write(external_root / "leak.go")

    (repo_root / "linked").symlink_to(external_root, target_is_directory=True)

    results = _relative(repo_root)

    assert "pkg/module.go" in results
    assert "linked/leak.go" not in results
