"""Logging setup for the pipesync service and CLI."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Route pipesync's module loggers to stderr.

    Reconciliation summaries are logged at INFO and per-pipeline failures at
    ERROR, so the default level shows one line per snapshot plus any failures.
    ``plan`` output goes to stdout and is never mixed with these lines.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )
