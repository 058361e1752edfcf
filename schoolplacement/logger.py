"""
Structured logging for schoolplacement.

Provides a shared logger with console and optional file output, JSON
context on every line, and placement metrics for monitoring how many
students are placed and why placements fail.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Logger with console and file outputs.
    Tracks counters for operations, placements and error codes.
    """

    def __init__(
        self,
        name: str = "schoolplacement",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to a daily file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self._close_handlers()
        self.logger.propagate = False

        self.metrics = {
            "operations": 0,
            "placements_attempted": 0,
            "placements_successful": 0,
            "placements_failed": 0,
            "errors_by_type": {},
            "placements_by_level": {},
            "placement_failures_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"schoolplacement_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # file always gets everything
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def _close_handlers(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def close(self):
        """Close and detach all handlers (releases open log files)."""
        self._close_handlers()

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def exception(self, message: str, **kwargs):
        """Log error message with the active traceback attached."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def _log(self, level: int, message: str, context: dict, exc_info: bool = False):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message, exc_info=exc_info)

    # Metric tracking

    def record_operation(self):
        """Increment the operation counter."""
        self.metrics["operations"] += 1

    def record_error(self, error_type: str):
        """Count a failed operation by error code."""
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_placement_attempt(self):
        self.metrics["placements_attempted"] += 1

    def record_placement_success(self, level: str):
        """Record a successful placement at the given level."""
        self.metrics["placements_successful"] += 1
        by_level = self.metrics["placements_by_level"]
        by_level[level] = by_level.get(level, 0) + 1

    def record_placement_failure(self, error_type: str):
        """Record a placement that could not be made."""
        self.metrics["placements_failed"] += 1
        failures = self.metrics["placement_failures_by_type"]
        failures[error_type] = failures.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics with the placement success rate."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        metrics_copy["placements_by_level"] = dict(self.metrics["placements_by_level"])
        metrics_copy["placement_failures_by_type"] = dict(self.metrics["placement_failures_by_type"])

        attempts = metrics_copy["placements_attempted"]
        metrics_copy["success_rate"] = 0.0
        if attempts > 0:
            metrics_copy["success_rate"] = round(
                metrics_copy["placements_successful"] / attempts, 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Placement Metrics ===")
        self.info(f"Operations: {metrics['operations']}")
        self.info(
            f"Placements: {metrics['placements_successful']}/{metrics['placements_attempted']} "
            f"({metrics['success_rate'] * 100:.1f}% success)"
        )

        if metrics["placements_by_level"]:
            self.info("Placements by level:")
            for level, count in sorted(metrics["placements_by_level"].items()):
                self.info(f"  {level}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "schoolplacement",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def configure_logger(
    name: str = "schoolplacement",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Replace the global logger with one built from these arguments.

    Unlike get_logger, this applies the arguments even when a logger
    already exists; the previous logger's handlers are closed.
    """
    global _global_logger

    reset_logger()
    _global_logger = StructuredLogger(name=name, level=level, **kwargs)
    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = None
