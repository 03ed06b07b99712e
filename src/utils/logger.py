"""
src/utils/logger.py
Structured logger with console (Rich) + rotating file output.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

_loggers: dict[str, logging.Logger] = {}

LOG_DIR = os.getenv("LOG_DIR", "logs")


def get_logger(name: str = "ssq") -> logging.Logger:
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    if not logger.handlers:
        console = RichHandler(rich_tracebacks=True, show_path=False)
        console.setLevel(logging.DEBUG)
        logger.addHandler(console)

        # One file per top-level component: "method.sum_tail" -> logs/method.log
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOG_DIR, f"{name.split('.')[0]}.log"),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        logger.addHandler(file_handler)

    _loggers[name] = logger
    return logger
