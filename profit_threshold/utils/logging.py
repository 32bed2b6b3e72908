# profit_threshold/utils/logging.py
"""
Structured logging system with JSON format
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from pathlib import Path
import structlog

from ..config import get_settings


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
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
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        # Add structured fields
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_structlog():
    """Setup structlog for structured logging"""
    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # JSON renderer outside development
    if get_settings().environment.value in ["staging", "production"]:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=shared_processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    enable_structlog: bool = True
) -> logging.Logger:
    """
    Setup package logging

    Args:
        level: Logging level (defaults to settings)
        log_file: Log file path (defaults to settings)
        enable_structlog: Whether to enable structlog

    Returns:
        Configured logger
    """
    monitoring = get_settings().monitoring
    if level is None:
        level = monitoring.log_level.value
    if log_file is None:
        log_file = monitoring.log_file

    if enable_structlog:
        setup_structlog()

    logger = logging.getLogger("profit_threshold")
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, level.upper()))
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(getattr(logging, level.upper()))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound under the package namespace"""
    return structlog.get_logger(f"profit_threshold.{name}")


def log_performance_metrics(logger: logging.Logger,
                            operation: str,
                            duration: float,
                            metadata: Optional[Dict[str, Any]] = None) -> None:
    """Log performance metrics"""
    log_data = {
        "operation": operation,
        "duration_seconds": duration,
        "performance_metric": True
    }

    if metadata:
        log_data.update(metadata)

    logger.info(f"Performance: {operation}", extra={"extra_fields": log_data})


def log_error_with_context(logger: logging.Logger,
                           error: Exception,
                           context: Optional[Dict[str, Any]] = None) -> None:
    """Log error with additional context"""
    log_data = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "error_logged": True
    }

    details = getattr(error, "details", None)
    if details:
        log_data["error_details"] = details

    if context:
        log_data.update(context)

    logger.error(f"Error: {type(error).__name__}",
                 exc_info=error,
                 extra={"extra_fields": log_data})


# Global logger instance
logger = setup_logging()

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "get_logger",
    "log_performance_metrics",
    "log_error_with_context",
    "logger"
]
