"""Command-line interface for the Go editor backend."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from config.settings import ConfigError, load_config
from execute.models import CommandJob, RunJob
from index.symbols import SymbolIndex
from workspace.service import EditorService, WorkspaceError

if TYPE_CHECKING:
    from config.settings import EditorConfig
    from execute.models import RunResult


def _add_env_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Toolchain environment override (repeatable), e.g. GOPROXY=direct",
    )


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=None,
        help="Workspace root (default: last active workspace)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="goedit")
    parser.add_argument(
        "--config-dir",
        default=".",
        help="Directory holding editor.toml and the state file (default: .)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    symbols_parser = subparsers.add_parser("symbols", help="Index and list symbols")
    symbols_parser.add_argument(
        "root", nargs="?", default=".", help="Workspace root (default: .)"
    )

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an import path")
    resolve_parser.add_argument("base", help="File containing the import")
    resolve_parser.add_argument("specifier", help="Import path as written")
    _add_root_option(resolve_parser)

    locate_parser = subparsers.add_parser("locate", help="Show the Go binary in use")
    locate_parser.add_argument("--goroot", default=None)

    run_parser = subparsers.add_parser("run", help="Run Go code with 'go run'")
    run_parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File to run; without it the code is run from a scratch file",
    )
    run_parser.add_argument(
        "--code-file",
        default=None,
        help="Read the code from this file (default: FILE itself, or stdin)",
    )
    _add_env_option(run_parser)
    _add_root_option(run_parser)

    cmd_parser = subparsers.add_parser("cmd", help="Run a terminal command line")
    cmd_parser.add_argument("line", help="Command line, e.g. 'go test ./...'")
    _add_env_option(cmd_parser)
    _add_root_option(cmd_parser)

    env_parser = subparsers.add_parser("env", help="Show toolchain environment")
    env_parser.add_argument("--goroot", default=None)

    workspace_parser = subparsers.add_parser(
        "workspace", help="Set and remember the active workspace"
    )
    workspace_parser.add_argument("path")

    return parser


def _configure_logging(config: EditorConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        filename=config.log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _write_json(obj: object) -> None:
    sys.stdout.write(orjson.dumps(obj).decode("utf-8"))
    sys.stdout.write("\n")


def _parse_env(pairs: list[str]) -> dict[str, str]:
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"--env expects KEY=VALUE, got '{pair}'"
            raise ValueError(msg)
        env[key] = value
    return env


def _activate_root(service: EditorService, root: str | None) -> None:
    if root is not None:
        service.set_workspace(root, persist=False, reindex=False)
        return
    service.restore_workspace()


def _report(result: RunResult) -> int:
    sys.stdout.write(result.output)
    if result.error is not None:
        sys.stderr.write(f"error: {result.error}\n")
        return 1
    return 0


def _handle_symbols(root: Path, config: EditorConfig) -> int:
    index = SymbolIndex(
        skip_dirs=config.index.skip_dirs,
        respect_gitignore=config.index.respect_gitignore,
    )
    index.rebuild(root)
    for symbol in index.list():
        _write_json(symbol.model_dump())
    return 0


def _handle_resolve(service: EditorService, args: argparse.Namespace) -> int:
    _activate_root(service, args.root)
    resolved = service.resolve(args.base, args.specifier)
    if resolved is None:
        sys.stderr.write("Not found\n")
        return 1
    _write_json({"path": resolved})
    return 0


def _read_code(args: argparse.Namespace) -> str:
    source = args.code_file or args.file
    if source is None:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _handle_run(service: EditorService, args: argparse.Namespace) -> int:
    _activate_root(service, args.root)
    job = RunJob(code=_read_code(args), path=args.file, env=_parse_env(args.env))
    return _report(service.run(job))


def _handle_cmd(service: EditorService, args: argparse.Namespace) -> int:
    _activate_root(service, args.root)
    job = CommandJob(command=args.line, env=_parse_env(args.env))
    return _report(service.run_command(job))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_dir = Path(args.config_dir).expanduser().resolve()
    try:
        config = load_config(config_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    _configure_logging(config)

    if args.command == "symbols":
        return _handle_symbols(Path(args.root).expanduser().resolve(), config)

    service = EditorService(config=config, config_dir=config_dir)

    try:
        if args.command == "resolve":
            return _handle_resolve(service, args)
        if args.command == "locate":
            _write_json({"path": service.locate({"GOROOT": args.goroot or ""})})
            return 0
        if args.command == "run":
            return _handle_run(service, args)
        if args.command == "cmd":
            return _handle_cmd(service, args)
        if args.command == "env":
            _write_json(service.environment(args.goroot).model_dump())
            return 0
        if args.command == "workspace":
            path = service.set_workspace(args.path, reindex=False)
            _write_json({"status": "ok", "path": path})
            return 0
    except (WorkspaceError, ValueError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    parser.error(f"unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
