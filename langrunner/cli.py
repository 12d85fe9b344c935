# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""CLI entrypoint: run a source file in a terminal session."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pathlib import Path
from typing import Optional

from langrunner.configuration import load_config
from langrunner.exceptions import RunnerConfigError
from langrunner.host import ConsoleConfirmer, LocalTerminalProvider
from langrunner.logging import setup_file_logger
from langrunner.orchestrator import DEFAULT_CONFIG_PATH, RunOrchestrator
from langrunner.types import TargetFile

EXIT_OK = 0
EXIT_NOT_RUN = 1
EXIT_CONFIG = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="langrunner",
        description="Run a source file with an installed compiler or interpreter.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        type=str,
        help="File to run, or '-' to read an unsaved buffer from stdin.",
    )
    parser.add_argument(
        "--name",
        type=str,
        help="Filename to use for stdin content (required with '-').",
    )
    parser.add_argument(
        "--config",
        type=str,
        help=(
            "Path to a YAML config. If omitted, uses "
            "configs/default_config.yaml when it exists."
        ),
    )
    parser.add_argument(
        "--can-run",
        action="store_true",
        help="Only report whether SOURCE has a runner (exit 0 or 1).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        dest="list_runners",
        help="Print the registered runners as JSON and exit.",
    )
    answer = parser.add_mutually_exclusive_group()
    answer.add_argument(
        "--yes",
        action="store_true",
        help="Install missing packages without asking.",
    )
    answer.add_argument(
        "--no-install",
        action="store_true",
        help="Never install missing packages.",
    )
    parser.add_argument(
        "--temp-dir",
        type=str,
        help="Directory for temporary copies and wrapper scripts.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this rotating log file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _resolve_config_path(args: argparse.Namespace) -> Optional[Path]:
    if args.config:
        return Path(args.config)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def _target_from_args(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> TargetFile:
    if args.source == "-":
        if not args.name:
            parser.error("--name is required when reading from stdin")
        return TargetFile.from_text(args.name, sys.stdin.read())
    path = Path(args.source).expanduser()
    if not path.is_file():
        parser.error(f"Source file '{path}' does not exist")
    return TargetFile.from_path(path)


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if args.log_file:
        setup_file_logger(Path(args.log_file))

    config_path = _resolve_config_path(args)
    assume: Optional[bool] = None
    if args.yes:
        assume = True
    elif args.no_install:
        assume = False

    try:
        config = load_config(config_path) if config_path is not None else {}
        orchestrator = RunOrchestrator(
            config_path,
            config=config,
            temp_dir=args.temp_dir,
            confirmer=ConsoleConfirmer(assume),
        )
        orchestrator.init()
    except RunnerConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    if args.list_runners:
        payload = {
            runner_id: definition.to_dict()
            for runner_id, definition in orchestrator.registry.list_all().items()
        }
        print(json.dumps(payload, indent=2))
        return EXIT_OK

    if not args.source:
        parser.error("a source file is required")

    if args.can_run:
        filename = args.name if args.source == "-" else Path(args.source).name
        runnable = orchestrator.can_run(filename)
        print("yes" if runnable else "no")
        return EXIT_OK if runnable else EXIT_NOT_RUN

    target = _target_from_args(args, parser)
    result = orchestrator.run(target)
    terminals = orchestrator.terminal_provider
    if isinstance(terminals, LocalTerminalProvider):
        terminals.close_all()
    orchestrator.destroy()
    return EXIT_OK if result.success else EXIT_NOT_RUN


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
