"""Logging configuration for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
is the one place handlers and levels are set.
"""

import logging
import sys


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
) -> None:
    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("orderdesk").setLevel(level)
