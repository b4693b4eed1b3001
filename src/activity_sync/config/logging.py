"""Root logger setup for the command line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Send records to stderr in a one-line format fit for cron mail.

    ``force`` replaces handlers installed earlier, e.g. by pytest's caplog.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, force=force)
