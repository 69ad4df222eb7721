"""The editor backend's single service object.

``EditorService`` owns every piece of shared mutable state: the active
workspace path and the published symbol snapshot. Transport layers hold
one instance and call its methods with plain data.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from config.settings import EditorConfig, resolve_state_path
from config.state import EditorState, load_state, save_state
from execute.runner import Orchestrator
from index.symbols import SymbolIndex
from resolve.imports import resolve_import
from toolchain.finder import ROOT_OVERRIDE_KEY, locate
from toolchain.platform import current_platform
from utils import is_source_file, is_within_root

if TYPE_CHECKING:
    from collections.abc import Mapping

    from execute.models import CommandJob, RunJob, RunResult, ToolchainReport
    from index.models import Symbol
    from toolchain.platform import PlatformProfile

logger = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """Raised when a requested workspace path is unusable."""


class EditorService:
    """Active workspace, symbol index and toolchain execution.

    Changing the workspace is not synchronized against in-flight runs or
    rebuilds; a run that started under the old root finishes under it.
    """

    def __init__(
        self,
        *,
        config: EditorConfig | None = None,
        config_dir: Path | None = None,
        platform: PlatformProfile | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self._config_dir = Path(config_dir) if config_dir else Path.cwd()
        self._state_path = resolve_state_path(self._config_dir, self.config)
        self._platform = platform or current_platform()
        self._workspace_lock = threading.Lock()
        self._workspace: str | None = None
        self.index = SymbolIndex(
            skip_dirs=self.config.index.skip_dirs,
            respect_gitignore=self.config.index.respect_gitignore,
        )
        self.orchestrator = Orchestrator(
            platform=self._platform,
            workspace_root=lambda: self.workspace,
            on_file_written=self.notify_file_written,
            default_toolchain_root=self.config.toolchain.root,
            max_concurrent_runs=self.config.toolchain.max_concurrent_runs,
        )

    @property
    def workspace(self) -> str | None:
        return self._workspace

    @property
    def state_path(self) -> Path:
        return self._state_path

    def restore_workspace(self) -> str | None:
        """Activate the persisted workspace, falling back to the cwd.

        Returns:
            The workspace that was activated, or None when neither the
            persisted path nor the current directory is usable.
        """
        state = load_state(self._state_path)
        candidate = state.last_work_dir
        if not candidate or not os.path.isdir(candidate):
            try:
                candidate = os.getcwd()
            except OSError:
                return None

        with self._workspace_lock:
            self._workspace = candidate
        logger.info("Active workspace: %s", candidate)
        return candidate

    def start(self) -> str | None:
        """Restore the last workspace and schedule its first index."""
        root = self.restore_workspace()
        if root is not None:
            self.index.schedule(Path(root))
        return root

    def set_workspace(
        self, path: str, *, persist: bool = True, reindex: bool = True
    ) -> str:
        """Switch the active workspace, persist it and schedule a rebuild.

        Raises:
            WorkspaceError: If ``path`` does not exist or is not a directory.
        """
        if not path:
            msg = "Path required"
            raise WorkspaceError(msg)
        try:
            is_dir = Path(path).is_dir()
            exists = is_dir or Path(path).exists()
        except OSError as exc:
            msg = f"Path does not exist: {exc}"
            raise WorkspaceError(msg) from exc
        if not exists:
            msg = f"Path does not exist: {path}"
            raise WorkspaceError(msg)
        if not is_dir:
            msg = f"Path is not a directory: {path}"
            raise WorkspaceError(msg)

        with self._workspace_lock:
            self._workspace = path
        if persist:
            save_state(self._state_path, EditorState(last_work_dir=path))
        if reindex:
            self.index.schedule(Path(path))
        return path

    def notify_file_written(self, path: str) -> bool:
        """Schedule a rebuild when ``path`` is a Go file in the workspace."""
        root = self.workspace
        if not root or not is_source_file(path) or not is_within_root(path, root):
            return False
        self.index.schedule(Path(root))
        return True

    def save_file(self, path: str, content: str) -> None:
        """Write ``content`` to ``path``; Go files trigger a re-index."""
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        self.notify_file_written(path)

    def list_symbols(self) -> tuple[Symbol, ...]:
        return self.index.list()

    def rebuild(self) -> bool:
        """Synchronously re-index the active workspace."""
        root = self.workspace
        if not root:
            return False
        return self.index.rebuild(Path(root))

    def resolve(self, base_path: str, specifier: str) -> str | None:
        return resolve_import(base_path, specifier, self.workspace)

    def locate(self, overrides: Mapping[str, str] | None = None) -> str:
        merged = dict(overrides or {})
        if not merged.get(ROOT_OVERRIDE_KEY) and self.config.toolchain.root:
            merged[ROOT_OVERRIDE_KEY] = self.config.toolchain.root
        return locate(merged, platform=self._platform)

    def run(self, job: RunJob) -> RunResult:
        return self.orchestrator.run(job)

    def run_command(self, job: CommandJob) -> RunResult:
        return self.orchestrator.run_command(job)

    def environment(self, goroot: str | None = None) -> ToolchainReport:
        return self.orchestrator.environment(goroot)


__all__ = ["EditorService", "WorkspaceError"]
