"""Logging for the docsearch service: brief console output plus a detailed rotating file"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'


def setup_logging(log_file: str = "logs/docsearch.log", console_level: int = logging.INFO, file_level: int = logging.DEBUG) -> Path:
    """
    Route all loggers to the console and to LOG_FILE.

    The file rolls over at 10MB and keeps 5 backups (docsearch.log.1 ...).
    Calling it again replaces the root handlers instead of adding more.

    Returns:
        Path of the log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filtering happens in handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Access lines for every request are noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.info(f"Logging to {log_path} (console={logging.getLevelName(console_level)}, file={logging.getLevelName(file_level)})")
    return log_path
