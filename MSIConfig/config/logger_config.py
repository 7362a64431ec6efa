"""
Module related to logging
"""

import json
import logging
import os
from datetime import datetime
from typing import Optional

# ANSI escape codes for colors
LOG_COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[41m",  # Red background
    "SECTION": "\033[35m",  # Magenta for section titles
    "RESET": "\033[0m",  # Reset color
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class MetaFormatter(logging.Formatter):
    """
    Formats '<timestamp> - <LEVEL> - <message>' and appends the structured
    `meta` passed through `extra={"meta": {...}}` as JSON on a tab-indented line.
    """

    def format(self, record):
        line = super().format(record)
        meta = getattr(record, "meta", None)
        if meta:
            line += "\n\t" + json.dumps(meta, default=str)
        return line


class ColorFormatter(MetaFormatter):
    def format(self, record):
        color = LOG_COLORS.get(record.levelname, LOG_COLORS["RESET"])
        reset = LOG_COLORS["RESET"]
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{reset}"
        try:
            return super().format(record)
        finally:
            # other handlers format the same record
            record.levelname = levelname


def setup_logging(console_level: str, log_dir: Optional[str] = None):
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # File handler (no colors here)
    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file = os.path.join(log_dir, f"{timestamp}.log")

        file_handler = logging.FileHandler(filename=log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            MetaFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=LOG_DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    # Console handler (with color)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    # Optional: reduce noise from dependencies
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module name.
    """
    return logging.getLogger(module_name)


def log_section_title(
    logger: logging.Logger, title: str, symbol: str = "=", width: int = 80
):
    """
    Logs a section title.
    """
    section_color = LOG_COLORS["SECTION"]
    reset_color = LOG_COLORS["RESET"]

    padding = symbol * ((width - len(title) - 2) // 2)
    section_title = f"{section_color}{padding} {title} {padding}{reset_color}"

    logger.info(section_title)


def log_parameter(logger: logging.Logger, parameter_name, parameter_value):
    """
    Logs a parameter value.
    """
    log_content = f"  {parameter_name}: {parameter_value}"
    logger.info(log_content)
