"""Command line interface for the external build integration."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable
import sys

from core.command_runner import RecordingCommandRunner, SubprocessCommandRunner, format_command
from core.console import Console

from .compat import LEGACY
from .errors import ConfigurationError, PipelineError
from .pipeline import Pipeline
from .settings import Settings, load_settings

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2


def _make_runner(dry_run: bool) -> SubprocessCommandRunner | RecordingCommandRunner:
    return RecordingCommandRunner() if dry_run else SubprocessCommandRunner()


def _make_console(args: Namespace, settings: Settings) -> Console:
    return Console.from_options(
        getattr(args, "log", None) or settings.log_level,
        verbose=getattr(args, "verbose", False),
        dry_run=getattr(args, "dry_run", False),
    )


def _load(args: Namespace, workspace: Path) -> Settings:
    overrides = {
        "toolchain_command": getattr(args, "toolchain_command", None),
        "manifest_path": getattr(args, "manifest_path", None),
        "target_dir": getattr(args, "target_dir", None),
        "working_dir": getattr(args, "working_dir", None),
        "output_dir": getattr(args, "output_dir", None),
        "build_config": getattr(args, "build_config", None),
    }
    return load_settings(
        workspace=workspace,
        config_file=getattr(args, "config_file", None),
        definitions=getattr(args, "definitions", []),
        overrides=overrides,
    )


def _emit_dry_run_output(runner: RecordingCommandRunner, *, workspace: Path) -> None:
    for line in runner.iter_formatted(workspace=workspace):
        print(line)


def _add_request_arguments(parser: ArgumentParser) -> None:
    parser.add_argument("-f", "--config-file", metavar="PATH", help="Configuration file (default: ./subbuild.toml)")
    parser.add_argument(
        "-D",
        dest="definitions",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a build parameter, e.g. -DCARGO_COMMAND=cargo or -DBUILD_CONFIG=Debug",
    )
    parser.add_argument("--toolchain-command", help="Executable of the external toolchain")
    parser.add_argument("--manifest-path", help="Manifest describing what to build")
    parser.add_argument("--target-dir", help="Output root of the external toolchain")
    parser.add_argument("--working-dir", help="Working directory for the toolchain process")
    parser.add_argument("--output-dir", help="Root directory receiving the staged artifacts")
    parser.add_argument("-c", "--config", dest="build_config", help="Build configuration name (only 'Debug' selects debug)")
    parser.add_argument("--log", choices=list(Console.LEVELS), help="Console log level (default: error)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output (maps to debug)")


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="subbuild", description="Build a subsystem with an external toolchain and stage its artifacts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser("build", help="Build, verify and stage the artifacts")
    _add_request_arguments(build_parser)
    build_parser.add_argument("-n", "--dry-run", action="store_true", help="Print the toolchain command without executing it")
    build_parser.add_argument("--no-stage", action="store_true", help="Verify the artifacts without copying them")

    plan_parser = subparsers.add_parser("plan", help="Show the command and paths a build would use")
    _add_request_arguments(plan_parser)
    plan_parser.add_argument("--no-stage", action="store_true", help="Plan without an output directory")

    validate_parser = subparsers.add_parser("validate", help="Check that every required parameter is set")
    _add_request_arguments(validate_parser)
    validate_parser.add_argument("--no-stage", action="store_true", help="Do not require an output directory")

    subparsers.add_parser("shim", help="List the legacy API names and their modern targets")

    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    if args.command == "shim":
        return _handle_shim(args)

    try:
        if args.command == "build":
            return _handle_build(args, workspace)
        if args.command == "plan":
            return _handle_plan(args, workspace)
        if args.command == "validate":
            return _handle_validate(args, workspace)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIGURATION
    except PipelineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    raise ValueError(f"Unknown command: {args.command}")


def _handle_build(args: Namespace, workspace: Path) -> int:
    settings = _load(args, workspace)
    console = _make_console(args, settings)
    stage = not args.no_stage
    runner = _make_runner(args.dry_run)
    pipeline = Pipeline(command_runner=runner, console=console)

    if args.dry_run:
        plan = pipeline.rehearse(settings.request, stage=stage)
        _emit_dry_run_output(runner, workspace=workspace)
        for line in plan.describe():
            console.dry(line)
        return EXIT_OK

    result = pipeline.run(settings.request, stage=stage)
    if result.staged:
        for path in result.staged:
            print(path)
    else:
        print(result.artifacts.binary)
    return EXIT_OK


def _handle_plan(args: Namespace, workspace: Path) -> int:
    settings = _load(args, workspace)
    console = _make_console(args, settings)
    pipeline = Pipeline(command_runner=RecordingCommandRunner(), console=console)
    plan = pipeline.plan(settings.request, stage=not args.no_stage)
    print(f"command: {format_command(plan.command)}")
    for line in plan.describe():
        print(line)
    return EXIT_OK


def _handle_validate(args: Namespace, workspace: Path) -> int:
    settings = _load(args, workspace)
    pipeline = Pipeline(command_runner=RecordingCommandRunner(), console=_make_console(args, settings))
    pipeline.plan(settings.request, stage=not args.no_stage)
    print("Validation successful")
    return EXIT_OK


def _handle_shim(args: Namespace) -> int:
    for name in LEGACY.names():
        target = LEGACY.lookup(name)
        print(f"{name} -> {getattr(target, '__qualname__', repr(target))}")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
