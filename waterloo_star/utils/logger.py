"""
Centralized logging configuration.
Provides structured logging for request tracing, backend calls and debugging.
"""
import logging
import logging.config
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pathlib import Path

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    Converts log records to one JSON object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_data = getattr(record, 'extra_data', None)
        if extra_data:
            log_entry.update(extra_data)

        return json.dumps(log_entry, ensure_ascii=False, default=str)

class StructuredLogger:
    """
    Wrapper around standard logger to provide structured logging methods.
    Keyword arguments become fields of the record; ``exc_info`` is forwarded.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log_with_extra(self, level: int, message: str, exc_info: bool = False, **kwargs):
        """Log with extra structured data."""
        extra_data = {k: v for k, v in kwargs.items() if v is not None}
        self.logger.log(level, message, exc_info=exc_info, extra={'extra_data': extra_data})

    def info(self, message: str, **kwargs):
        """Log info level with structured data."""
        self._log_with_extra(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning level with structured data."""
        self._log_with_extra(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error level with structured data."""
        self._log_with_extra(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug level with structured data."""
        self._log_with_extra(logging.DEBUG, message, **kwargs)

def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> None:
    """
    Setup application logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for JSON log output
        enable_console: Whether to log to console
    """
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JSONFormatter,
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {},
        "loggers": {
            "waterloo_star": {
                "level": log_level,
                "handlers": [],
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": [],
                "propagate": False
            },
            "aiohttp.client": {
                "level": "WARNING",
                "handlers": [],
                "propagate": False
            }
        },
        "root": {
            "level": log_level,
            "handlers": []
        }
    }

    if enable_console:
        config["handlers"]["console"] = {
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "standard",
            "level": log_level
        }
        for logger_config in config["loggers"].values():
            logger_config["handlers"].append("console")
        config["root"]["handlers"].append("console")

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "formatter": "json",
            "level": log_level
        }
        for logger_config in config["loggers"].values():
            logger_config["handlers"].append("file")
        config["root"]["handlers"].append("file")

    logging.config.dictConfig(config)

def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    if not name.startswith("waterloo_star"):
        name = f"waterloo_star.{name}"
    return StructuredLogger(name)

def log_business_event(
    event_type: str,
    details: Dict[str, Any],
    request_id: Optional[str] = None
) -> None:
    """
    Log forum events (post created, liked, deleted...) for audit trails.

    Args:
        event_type: Type of event (e.g., 'post_created', 'post_liked')
        details: Event-specific details
        request_id: Request ID for tracing
    """
    audit_logger = get_logger("audit")
    audit_logger.info(
        f"Business event: {event_type}",
        event_type=event_type,
        request_id=request_id,
        **details
    )

def log_performance(
    operation: str,
    duration_ms: float,
    additional_data: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log performance metrics.

    Args:
        operation: Operation name
        duration_ms: Duration in milliseconds
        additional_data: Additional context data
    """
    perf_logger = get_logger("performance")
    data: Dict[str, Any] = {"duration_ms": duration_ms}
    if additional_data:
        data.update(additional_data)

    perf_logger.info(
        f"Performance: {operation}",
        operation=operation,
        **data
    )
