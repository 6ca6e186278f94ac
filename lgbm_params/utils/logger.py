# lgbm_params/utils/logger.py
"""Logging utilities for the lgbm_params package.

All package loggers hang off the ``lgbm_params`` root logger, which is
configured once with a console handler and an optional rotating log file.
"""

import logging
import logging.handlers
import sys
import json
from pathlib import Path
from typing import Optional, Dict, Iterator, List, Union
from datetime import datetime
import threading
from contextlib import contextmanager

from .exceptions import FileOperationError

ROOT_LOGGER_NAME = 'lgbm_params'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _level_number(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper())
    return level


def _rotating_file_handler(log_file: Union[str, Path]) -> logging.Handler:
    try:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.handlers.RotatingFileHandler(
            log_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding='utf-8'
        )
    except OSError as e:
        raise FileOperationError(
            f"Failed to create log file handler: {log_file}",
            error_code="LOG_FILE_SETUP_FAILED",
            context={'log_file': str(log_file), 'error': str(e)}
        ) from e


class LgbmParamsFormatter(logging.Formatter):
    """Formatter producing ``[time] LEVEL | module | message`` lines.

    A record logged with ``extra={'context': {...}}`` gets the context
    appended as JSON; one carrying ``duration`` gets it in seconds.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        parts = [f"[{timestamp}] {record.levelname:8s}", f"{record.name:20s}", record.getMessage()]

        context = getattr(record, 'context', None)
        if context is not None:
            parts.append(f"Context: {json.dumps(context, default=str)}")
        duration = getattr(record, 'duration', None)
        if duration is not None:
            parts.append(f"Duration: {duration:.3f}s")

        return " | ".join(parts)


class LgbmParamsLogger:
    """Package-wide logger registry and configuration."""

    _loggers: Dict[str, logging.Logger] = {}
    _configured: bool = False
    _lock = threading.Lock()

    @classmethod
    def configure(
        cls,
        level: Union[str, int] = logging.INFO,
        log_file: Optional[Union[str, Path]] = None,
        include_console: bool = True
    ) -> None:
        """Configure the ``lgbm_params`` root logger.

        Only the first call has an effect until the registry is reset.

        Args:
            level: Logging level name or number
            log_file: Optional log file, rotated at ``LOG_FILE_MAX_BYTES``
            include_console: Whether to log to stdout as well

        Raises:
            FileOperationError: If the log file handler cannot be created
        """
        with cls._lock:
            if cls._configured:
                return

            level = _level_number(level)
            handlers: List[logging.Handler] = []
            if include_console:
                handlers.append(logging.StreamHandler(sys.stdout))
            if log_file:
                handlers.append(_rotating_file_handler(log_file))

            root_logger = logging.getLogger(ROOT_LOGGER_NAME)
            root_logger.setLevel(level)
            root_logger.handlers.clear()
            formatter = LgbmParamsFormatter()
            for handler in handlers:
                handler.setLevel(level)
                handler.setFormatter(formatter)
                root_logger.addHandler(handler)

            cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger under the package root.

        Names outside the package are re-rooted, so ``foo.bar`` becomes
        ``lgbm_params.bar`` and ``__main__`` becomes ``lgbm_params.main``.

        Args:
            name: Logger name (typically __name__)

        Returns:
            Logger instance
        """
        if not cls._configured:
            cls.configure()

        if not name.startswith(ROOT_LOGGER_NAME):
            if name == '__main__':
                name = f'{ROOT_LOGGER_NAME}.main'
            else:
                name = f'{ROOT_LOGGER_NAME}.{name.split(".")[-1]}'

        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)

        return cls._loggers[name]

    @classmethod
    def set_level(cls, level: Union[str, int]) -> None:
        """Change the level of the package root and all of its handlers."""
        level = _level_number(level)
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a package logger for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance

    Example:
        >>> from lgbm_params.utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Composing options")
    """
    return LgbmParamsLogger.get_logger(name)


def configure_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    include_console: bool = True
) -> None:
    """Configure package-wide logging settings.

    Example:
        >>> from lgbm_params.utils.logger import configure_logging
        >>> configure_logging(level="DEBUG", log_file="logs/lgbm_params.log")
    """
    LgbmParamsLogger.configure(level=level, log_file=log_file, include_console=include_console)


def set_log_level(level: Union[str, int]) -> None:
    """Change logging level for all package loggers."""
    LgbmParamsLogger.set_level(level)


@contextmanager
def temporary_log_level(level: Union[str, int]) -> Iterator[None]:
    """Change the package log level for the duration of a block.

    Example:
        >>> with temporary_log_level("DEBUG"):
        ...     compose(options)
    """
    original_level = logging.getLogger(ROOT_LOGGER_NAME).level
    LgbmParamsLogger.set_level(level)
    try:
        yield
    finally:
        LgbmParamsLogger.set_level(original_level)
