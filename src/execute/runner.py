"""Execution of submitted Go code and terminal command lines."""

from __future__ import annotations

import contextlib
import logging
import os
import subprocess
import tempfile
import threading
from typing import TYPE_CHECKING

from execute.models import RunResult, ToolchainReport
from execute.output import normalize_output
from toolchain.finder import EXECUTABLE_NAME, ROOT_OVERRIDE_KEY, locate
from toolchain.platform import current_platform, host_arch, host_os
from utils import SOURCE_EXTENSION, is_within_root

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from execute.models import CommandJob, RunJob
    from toolchain.platform import PlatformProfile

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "main_"


def build_environment(overrides: Mapping[str, str]) -> dict[str, str]:
    """Overlay non-empty overrides onto the current process environment.

    An empty value never unsets a variable; it is simply ignored.
    """
    env = dict(os.environ)
    env.update({key: value for key, value in overrides.items() if value})
    return env


def command_argv(
    command_line: str,
    toolchain_path: str,
    platform: PlatformProfile,
) -> list[str]:
    """Turn a terminal command line into an argument vector.

    A leading ``go`` is replaced by the located toolchain. Other bare
    commands go through the platform shell when the platform needs it
    (builtins such as ``dir`` only exist there).

    Examples:
        >>> from toolchain.platform import POSIX
        >>> command_argv("go build ./...", "/opt/go/bin/go", POSIX)
        ['/opt/go/bin/go', 'build', './...']
    """
    tokens = command_line.split()
    name, args = tokens[0], tokens[1:]
    if name == EXECUTABLE_NAME:
        return [toolchain_path, *args]
    if platform.shell_wraps_bare_commands and "/" not in name and "\\" not in name:
        return platform.shell_argv(command_line)
    return tokens


def _describe_exit(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status {returncode}"


def _missing_toolchain_hint(go_bin: str) -> str:
    return (
        f"\n(Failed to execute '{go_bin}'. "
        "Check if Go is installed or GOROOT is configured correctly)"
    )


class Orchestrator:
    """Runs code through the Go toolchain and captures its output.

    Each call is synchronous for its caller; independent calls run in
    independent subprocesses. ``max_concurrent_runs`` optionally caps how
    many subprocesses are alive at once.
    """

    def __init__(
        self,
        *,
        platform: PlatformProfile | None = None,
        workspace_root: Callable[[], str | None] | None = None,
        on_file_written: Callable[[str], None] | None = None,
        default_toolchain_root: str | None = None,
        max_concurrent_runs: int | None = None,
        scratch_dir: str | None = None,
    ) -> None:
        self._platform = platform or current_platform()
        self._workspace_root = workspace_root or (lambda: None)
        self._on_file_written = on_file_written
        self._default_toolchain_root = default_toolchain_root
        self._slots = (
            threading.BoundedSemaphore(max_concurrent_runs)
            if max_concurrent_runs
            else None
        )
        self._scratch_dir = scratch_dir

    def _overrides(self, env: Mapping[str, str]) -> dict[str, str]:
        overrides = dict(env)
        if not overrides.get(ROOT_OVERRIDE_KEY) and self._default_toolchain_root:
            overrides[ROOT_OVERRIDE_KEY] = self._default_toolchain_root
        return overrides

    @contextlib.contextmanager
    def _slot(self) -> Iterator[None]:
        if self._slots is None:
            yield
            return
        with self._slots:
            yield

    def _execute(
        self,
        argv: list[str],
        *,
        cwd: str | None,
        env: dict[str, str] | None,
    ) -> tuple[bytes, str | None]:
        """Run ``argv`` capturing stdout and stderr as one stream."""
        logger.info("Running %s (cwd=%s)", argv, cwd)
        try:
            with self._slot():
                completed = subprocess.run(
                    argv,
                    cwd=cwd,
                    env=env,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
        except (OSError, ValueError) as exc:
            # ValueError: NUL bytes in argv or environment values.
            logger.warning("Failed to launch %s: %s", argv[0], exc)
            return b"", str(exc)

        if completed.returncode != 0:
            logger.info("%s exited with %d", argv[0], completed.returncode)
            return completed.stdout, _describe_exit(completed.returncode)
        return completed.stdout, None

    def _create_scratch(self, data: bytes) -> str:
        fd, scratch = tempfile.mkstemp(
            prefix=SCRATCH_PREFIX, suffix=SOURCE_EXTENSION, dir=self._scratch_dir
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except BaseException:
            _remove_scratch(scratch)
            raise
        return scratch

    def _working_directory(self, run_file: str, *, persistent: bool) -> str:
        """Module root for workspace files, the file's folder otherwise."""
        root = self._workspace_root()
        if persistent and root and is_within_root(run_file, root):
            return root
        return os.path.dirname(os.path.abspath(run_file))

    def run(self, job: RunJob) -> RunResult:
        """Run ``job.code`` with ``go run``.

        With ``job.path`` set the file is overwritten first, so the disk
        holds the submitted text even when the toolchain then fails to
        start. Without it a scratch file is created and always removed.
        """
        overrides = self._overrides(job.env)
        go_bin = locate(overrides, platform=self._platform)

        # Encoded up front so an unencodable string never truncates the target.
        try:
            data = job.code.encode("utf-8")
        except UnicodeEncodeError as exc:
            failure = (
                "Failed to save file before running"
                if job.path
                else "Failed to create temp file"
            )
            return RunResult(error=f"{failure}: {exc}")

        scratch: str | None = None
        if job.path:
            run_file = os.path.abspath(job.path)
            try:
                with open(run_file, "wb") as handle:
                    handle.write(data)
            except OSError as exc:
                return RunResult(error=f"Failed to save file before running: {exc}")
        else:
            try:
                scratch = self._create_scratch(data)
            except OSError as exc:
                return RunResult(error=f"Failed to create temp file: {exc}")
            run_file = scratch

        try:
            raw, error = self._execute(
                [go_bin, "run", run_file],
                cwd=self._working_directory(run_file, persistent=scratch is None),
                env=build_environment(overrides),
            )
        finally:
            if scratch is not None:
                _remove_scratch(scratch)

        if scratch is None and self._on_file_written is not None:
            self._on_file_written(run_file)

        output = normalize_output(raw, self._platform)
        if error is not None and not raw:
            error += _missing_toolchain_hint(go_bin)
        return RunResult(output=output, error=error)

    def run_command(self, job: CommandJob) -> RunResult:
        """Run an arbitrary terminal command line in the workspace root."""
        if not job.command.split():
            return RunResult(error="no command given")

        overrides = self._overrides(job.env)
        go_bin = locate(overrides, platform=self._platform)
        argv = command_argv(job.command, go_bin, self._platform)

        raw, error = self._execute(
            argv,
            cwd=self._workspace_root() or os.getcwd(),
            env=build_environment(overrides),
        )
        return RunResult(output=normalize_output(raw, self._platform), error=error)

    def environment(self, goroot: str | None = None) -> ToolchainReport:
        """Report host details and the toolchain's ``go env`` output."""
        overrides = self._overrides({ROOT_OVERRIDE_KEY: goroot} if goroot else {})
        go_bin = locate(overrides, platform=self._platform)
        raw, error = self._execute(
            [go_bin, "env"], cwd=None, env=build_environment(overrides)
        )
        env_vars = normalize_output(raw, self._platform)
        if error is not None:
            env_vars = f"Error running '{go_bin} env': {error}\nOutput: {env_vars}"
        return ToolchainReport(
            executable=go_bin,
            host_os=host_os(),
            host_arch=host_arch(),
            env_vars=env_vars,
            error=error,
        )


def _remove_scratch(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("Could not remove scratch file %s: %s", path, exc)


__all__ = ["Orchestrator", "build_environment", "command_argv"]
