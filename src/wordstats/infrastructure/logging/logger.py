"""Application-wide logger."""

import json
import logging
import logging.handlers
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..config.config_models import LoggingConfig


LOGGER_NAME = "wordstats"

# LogRecord attributes that are not user-supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Formats records as JSON lines, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class WordStatsLogger:
    """
    Holder for the shared ``wordstats`` logger.

    Library code calls ``get_instance()`` and logs with ``extra={...}``
    for structured context. Until ``configure()`` is called the logger
    only has a NullHandler, so embedding applications stay quiet.
    """

    _instance: Optional[logging.Logger] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> logging.Logger:
        """Get the shared logger."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    logger = logging.getLogger(LOGGER_NAME)
                    if not logger.handlers:
                        logger.addHandler(logging.NullHandler())
                    cls._instance = logger
        return cls._instance

    @classmethod
    def configure(
        cls,
        config: Optional[LoggingConfig] = None,
        console: Optional[Console] = None,
    ) -> logging.Logger:
        """
        Attach handlers according to configuration.

        Replaces handlers from a previous ``configure()`` call.

        Args:
            config: Logging configuration (defaults if omitted)
            console: Rich console for console output (stderr if omitted)

        Returns:
            The configured logger
        """
        config = config or LoggingConfig()
        logger = cls.get_instance()

        with cls._lock:
            cls._remove_handlers(logger)
            logger.setLevel(config.level)
            logger.propagate = False

            if config.console:
                handler = RichHandler(
                    console=console or Console(stderr=True),
                    show_path=False,
                    rich_tracebacks=True,
                )
                handler.setLevel(config.level)
                logger.addHandler(handler)

            if config.file:
                log_path = Path(config.file)
                log_path.parent.mkdir(parents=True, exist_ok=True)
                if config.rotation == "daily":
                    file_handler: logging.Handler = logging.handlers.TimedRotatingFileHandler(
                        log_path,
                        when="midnight",
                        backupCount=config.retention_days,
                        encoding="utf-8",
                    )
                else:
                    file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setFormatter(StructuredFormatter())
                file_handler.setLevel(config.level)
                logger.addHandler(file_handler)

            if not logger.handlers:
                logger.addHandler(logging.NullHandler())

        return logger

    @classmethod
    def reset(cls):
        """Remove all handlers and forget configuration (used by tests)."""
        with cls._lock:
            if cls._instance is not None:
                cls._remove_handlers(cls._instance)
                cls._instance.addHandler(logging.NullHandler())
                cls._instance.setLevel(logging.NOTSET)
                cls._instance.propagate = True

    @staticmethod
    def _remove_handlers(logger: logging.Logger):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
