"""Logging configuration for AMP Hero Preload.

Provides structured logging with JSON formatting support for production
and human-readable formatting for development.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# LogRecord attributes that are not user-supplied context
_RESERVED_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)

TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredLogFormatter(logging.Formatter):
    """Structured JSON formatter for production logging.

    Outputs log records as JSON objects with consistent fields:
    - timestamp: ISO format timestamp
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - any extra fields passed via ``extra=``
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: LogRecord to format.

        Returns:
            JSON formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_FIELDS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class OptimizationStatistics:
    """Collects and reports statistics for a batch of documents.

    Attributes:
        start_time: When statistics collection started.
        documents_processed: Documents transformed and written.
        documents_failed: Documents that could not be read or written.
        preloads_injected: Preload links added across all documents.
        errors: List of error messages encountered.
    """

    def __init__(self) -> None:
        """Initialize statistics collector."""
        self.start_time: datetime = datetime.now(UTC)
        self.documents_processed: int = 0
        self.documents_failed: int = 0
        self.preloads_injected: int = 0
        self.errors: list[str] = []

    def record_document_processed(self, path: str, preloads_injected: int) -> None:
        """Record a successfully transformed document.

        Args:
            path: Source path of the document.
            preloads_injected: Number of preload links added to it.
        """
        self.documents_processed += 1
        self.preloads_injected += preloads_injected

    def record_document_failed(self, path: str, error: str) -> None:
        """Record a document that failed to process.

        Args:
            path: Source path of the document.
            error: Error message.
        """
        self.documents_failed += 1
        self.errors.append(f"Document failed {path}: {error}")

    def get_summary(self) -> dict[str, Any]:
        """Get statistics summary as dictionary."""
        duration = (datetime.now(UTC) - self.start_time).total_seconds()

        return {
            "duration_seconds": round(duration, 2),
            "documents_processed": self.documents_processed,
            "documents_failed": self.documents_failed,
            "preloads_injected": self.preloads_injected,
            "error_count": len(self.errors),
        }

    def log_summary(self, logger: logging.Logger) -> None:
        """Log statistics summary.

        Args:
            logger: Logger instance to use.
        """
        summary = self.get_summary()

        logger.info("=" * 60)
        logger.info("HERO PRELOAD SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Duration: {summary['duration_seconds']:.2f} seconds")
        logger.info(f"Documents processed: {summary['documents_processed']}")
        logger.info(f"Documents failed: {summary['documents_failed']}")
        logger.info(f"Preloads injected: {summary['preloads_injected']}")
        logger.info(f"Errors: {summary['error_count']}")
        logger.info("=" * 60)


def setup_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Set up logging configuration.

    Args:
        level: Logging level (default: INFO).
        json_format: Use JSON formatting for structured logs.
        log_file: Optional file path to write logs to.
    """
    handlers: list[logging.Handler] = []

    # Console handler; stdout carries transformed HTML, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    handlers.append(console_handler)

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        if json_format:
            handler.setFormatter(StructuredLogFormatter())
        else:
            handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("scrapy").setLevel(logging.WARNING)
