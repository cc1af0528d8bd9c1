"""Logging setup for the mealspace service and scripts.

Modules log through ``logging.getLogger(__name__)`` and pass request context
with ``extra={...}``; ``configure_logging()`` is called once by the entry point.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# HTTP client and dev-server chatter
QUIET_LOGGERS = ("urllib3", "requests", "werkzeug")


def configure_logging(level: str = "INFO") -> None:
    """Send every record at ``level`` or above to stdout.

    Safe to call repeatedly: the mealspace handler replaces any handler a
    previous call installed.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.set_name("mealspace")

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for existing in list(root.handlers):
        if existing.get_name() == "mealspace":
            root.removeHandler(existing)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
