# src/config/logging_config.py

"""Per-run timestamped logging configuration for product_advisor.

Each launch writes a dedicated log file inside ``logs/`` named after the
launch time (e.g. ``logs/run_20261019_153045.log``).  Every
``product_advisor.*`` logger (catalog, favorites, ranking, remote, cli)
propagates into that single file, while only warnings and errors reach
stderr so JSON written to stdout stays clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "product_advisor"


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach file and console handlers to the ``product_advisor`` logger.

    Args:
        logs_dir: Directory for the run log. Defaults to ``Settings.LOGS_DIR``.

    Returns:
        The :class:`~pathlib.Path` of the log file for this run.
    """
    directory = logs_dir or Settings.LOGS_DIR
    directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, embedding callers) keep the first handlers
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = directory / f"run_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
