"""Logging configuration for the YNAB query tools."""

import logging
import sys
import time
from pathlib import Path

# Root logger name; module loggers are children of this one
ROOT_LOGGER_NAME = "ynab_query"

# Sensitive field names to sanitize in log output
SENSITIVE_FIELDS = {"password", "token", "access_token", "api_token", "secret", "api_key"}


def _sanitize_context(context: dict[str, object]) -> dict[str, object]:
    """Sanitize sensitive fields in context dict.

    Args:
        context: Dictionary of context values.

    Returns:
        Dictionary with sensitive fields masked.
    """
    return {k: "***" if k.lower() in SENSITIVE_FIELDS else v for k, v in context.items()}

# Log format with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    console_output: bool = True,
) -> logging.Logger:
    """Configure logging for the application.

    Console output goes to stderr so that JSON written to stdout stays clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file. If None, no file handler is installed.
        console_output: Whether to also output to console.

    Returns:
        The root logger configured for the application.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Clear any existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file is not None:
        log_path = Path(log_file)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__).

    Returns:
        A logger instance for the module.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class LogContext:
    """Times a budgeting API call and logs it as one line when it ends.

    Fields passed to the constructor describe the request. Fields passed to
    ``record`` describe the outcome and are appended to the completion line,
    e.g. ``list_transactions completed in 84 ms (budget_id=b1, transactions=12)``.
    """

    def __init__(self, logger: logging.Logger, operation: str, **context: object):
        """Initialize log context.

        Args:
            logger: Logger instance to use.
            operation: Name of the API operation.
            **context: Request fields to include in log messages.
        """
        self.logger = logger
        self.operation = operation
        self.context = dict(context)
        self.elapsed_ms: float | None = None
        self._started: float | None = None

    def record(self, **fields: object) -> None:
        """Attach outcome fields to the completion line."""
        self.context.update(fields)

    def _describe(self) -> str:
        sanitized = _sanitize_context(self.context)
        return ", ".join(f"{k}={v}" for k, v in sanitized.items())

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation} ({self._describe()})")
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> bool:
        assert self._started is not None
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000

        if exc_type is not None:
            # Traceback only when debugging; the message carries the cause
            self.logger.error(
                f"{self.operation} failed after {self.elapsed_ms:.0f} ms "
                f"({self._describe()}): {exc_type.__name__}: {exc_val}",
                exc_info=self.logger.isEnabledFor(logging.DEBUG),
            )
        else:
            self.logger.info(
                f"{self.operation} completed in {self.elapsed_ms:.0f} ms ({self._describe()})"
            )
        return False
