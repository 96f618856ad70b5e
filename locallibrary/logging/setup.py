import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from locallibrary.core.config import get_settings
from locallibrary.logging.formatters import ColorizedFormatter, JSONFormatter

__all__ = ["get_logger", "setup_logging"]

settings = get_settings()


def _make_formatter() -> logging.Formatter:
    if settings.LOG_FORMAT == "json":
        return JSONFormatter()
    return ColorizedFormatter()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the application's handlers.

    Args:
        name: Logger name

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Once setup_logging() has run, handlers come from the root logger
    if not logger.hasHandlers():
        log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_make_formatter())
        console_handler._early_handler = True
        logger.addHandler(console_handler)

    return logger


def setup_logging() -> None:
    """
    Configure the root logger for the application.

    Console output is colorized unless LOG_FORMAT is ``json``. In production a
    rotating file handler with JSON records is added under LOG_DIR.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    # Loggers created before this call carry their own console handler;
    # drop it so records are not written twice once they reach the root.
    for existing in list(logging.root.manager.loggerDict.values()):
        if isinstance(existing, logging.Logger):
            for handler in list(existing.handlers):
                if getattr(handler, "_early_handler", False):
                    existing.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_make_formatter())
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if settings.is_production or settings.LOG_FILE:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / (settings.LOG_FILE or "locallibrary.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONFormatter())
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    # Quieter third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)
