"""
Safe logging adapter over structlog.
Gives the config store and manager one keyword-argument logging interface.
"""

from typing import Any, Optional

import structlog


class SafeLogger:
    """
    Thin wrapper over a structlog logger.
    Event names are snake_case identifiers; context goes in keyword arguments.
    """

    def __init__(self, logger: Any):
        self._logger = logger

    def _log(self, log_level: str, event: str, **kwargs) -> None:
        getattr(self._logger, log_level)(event, **kwargs)

    def bind(self, **kwargs) -> "SafeLogger":
        """
        Bind context to the logger.

        Args:
            **kwargs: Context to bind

        Returns:
            New SafeLogger carrying the bound context
        """
        return SafeLogger(self._logger.bind(**kwargs))

    def debug(self, event: str, **kwargs) -> None:
        self._log("debug", event, **kwargs)

    def info(self, event: str, **kwargs) -> None:
        self._log("info", event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        self._log("warning", event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        self._log("error", event, **kwargs)

    def critical(self, event: str, **kwargs) -> None:
        self._log("critical", event, **kwargs)

    warn = warning


def get_safe_logger(name: Optional[str] = None) -> SafeLogger:
    """
    Get a SafeLogger for the given logger name.

    Args:
        name: Optional logger name

    Returns:
        SafeLogger instance
    """
    logger = structlog.get_logger(name) if name else structlog.get_logger()
    return SafeLogger(logger)
