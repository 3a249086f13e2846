"""Correlation-aware logging for markup parsing.

Wraps the standard library logger so every record carries the component name
and an optional correlation ID in its ``extra`` data.
"""

import logging
from typing import Any, Dict, Optional, Union

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def is_enabled_for(self, level: int) -> bool:
        """Check whether records at ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception message with correlation info and traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))


class _ComponentDefaults(logging.Filter):
    """Fill in ``component`` for records emitted outside CorrelationLogger."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        return True


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging for command-line use.

    Args:
        level: Logging level as an int or a level name such as ``"DEBUG"``
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    handler = logging.StreamHandler()
    handler.addFilter(_ComponentDefaults())
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
