# roach/logger.py
#
# Line-based logging for batch runs: "[HH:MM:SS] LEVEL: message", coloured
# per level when the stream is a terminal.

import logging
import sys
from typing import Optional

from roach import config

ROOT_LOGGER = "roach"

RESET = "\x1b[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\x1b[90m",    # grey
    logging.INFO: "\x1b[36m",     # cyan
    logging.WARNING: "\x1b[33m",  # yellow
    logging.ERROR: "\x1b[31m",    # red
}
LEVEL_NAMES = {logging.WARNING: "WARN", logging.CRITICAL: "ERROR"}


class BatchFormatter(logging.Formatter):
    def __init__(self, color: bool = False):
        super().__init__(datefmt="%H:%M:%S")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        level = LEVEL_NAMES.get(record.levelno, record.levelname)
        stamp = self.formatTime(record, self.datefmt)
        head = f"[{stamp}] {level}"
        if self.color:
            head = f"{LEVEL_COLORS.get(record.levelno, '')}{head}{RESET}"
        line = f"{head}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class BatchHandler(logging.StreamHandler):
    """The package's own stderr handler, so setup_logging can find it again."""


def setup_logging(debug: bool = False, color: Optional[bool] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger. Safe to call repeatedly."""
    if color is None:
        color = sys.stderr.isatty() and not config.NO_COLOR
    log = logging.getLogger(ROOT_LOGGER)
    handler = next((h for h in log.handlers if isinstance(h, BatchHandler)), None)
    if handler is None:
        handler = BatchHandler()
        log.addHandler(handler)
    else:
        handler.setStream(sys.stderr)
    handler.setFormatter(BatchFormatter(color=color))
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    return log


def progress_bar(percentage: int, width: int = 20) -> str:
    filled = round(percentage / 100 * width)
    return "[" + "█" * filled + "░" * (width - filled) + "]"


class BatchReporter:
    """Progress and summary events of a batch run, emitted through logging."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logging.getLogger(f"{ROOT_LOGGER}.batch")

    def info(self, message: str) -> None:
        self.log.info(message)

    def warn(self, message: str) -> None:
        self.log.warning(message)

    def error(self, message: str) -> None:
        self.log.error(message)

    def progress(self, current: int, total: int, message: str = "") -> None:
        percentage = round(current / total * 100) if total else 100
        text = f"{progress_bar(percentage)} Progress: {current}/{total} ({percentage}%)"
        if message:
            text += f" - {message}"
        self.info(text)

    def validation_summary(self, valid_count: int, error_count: int) -> None:
        if error_count == 0:
            self.info(f"Validation complete: {valid_count} valid entries found")
        else:
            self.warn(f"Validation complete: {valid_count} valid, {error_count} invalid entries")

    def processing_complete(self, results_count: int, processed_count: int) -> None:
        self.info(f"Processing complete: {results_count} results from {processed_count} entries")
