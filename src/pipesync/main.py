#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pipesync.adapters.registry import to_request_body
from pipesync.app import plan_snapshot_files, sync_registry
from pipesync.config import configure_logging
from pipesync.domain.reconciliation import ApplyPipeline

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pipesync.domain.reconciliation import ReconciliationAction

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep the pipeline registry in sync")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Poll the workspace config and reconcile the registry")

    plan = subparsers.add_parser(
        "plan",
        help="Print the registry actions between two workspace config files",
    )
    plan.add_argument(
        "--current",
        type=Path,
        required=True,
        help="Workspace config JSON to reconcile towards",
    )
    plan.add_argument(
        "--previous",
        type=Path,
        help="Workspace config JSON last applied (omit to plan a first sync)",
    )

    return parser.parse_args(list(argv))


def _describe(action: ReconciliationAction) -> dict[str, object]:
    if isinstance(action, ApplyPipeline):
        return {
            "action": "apply",
            "pipeline": action.pipeline_id,
            "body": to_request_body(action.config),
        }
    return {"action": "remove", "pipeline": action.pipeline_id}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=getattr(logging, parsed_args.log_level))

    try:
        if parsed_args.command == "run":
            sync_registry()
        elif parsed_args.command == "plan":
            plan = plan_snapshot_files(current=parsed_args.current, previous=parsed_args.previous)
            for action in plan.actions:
                print(json.dumps(_describe(action), sort_keys=True))
            log.info(
                "Planned %s applies and %s removals",
                len(plan.applies),
                len(plan.removals),
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during registry sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def cli() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    cli()
