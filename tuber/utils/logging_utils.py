"""
Logging Utilities for the tuber CLI

This module provides centralized logging configuration. Diagnostic output
always goes to stderr: stdout is reserved for the summary text so that it can
be piped or captured by the operator.

Each run gets a short run ID that is injected into every message, which keeps
the output of the step orchestrator and the summary flow easy to correlate.
"""
import logging
import sys
import uuid
from typing import Optional, Union


LOGGER_NAME = "tuber"


class _RunIdFilter(logging.Filter):
    """Give records logged without an adapter a placeholder run ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = "-"
        return True


def setup_logger(
    log_level: Union[int, str] = logging.WARNING,
    logger_name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Configure the tuber logger.

    Args:
        log_level: Logging level constant or name (e.g. "DEBUG").
                  Defaults to logging.WARNING so the spinner stays readable.
        logger_name: Name for the logger instance. Defaults to "tuber".

    Returns:
        Configured Logger instance ready for use with get_run_logger().

    Example:
        >>> logger = setup_logger(log_level="DEBUG")
        >>> run_logger = get_run_logger("3f2a9c1e")
        >>> run_logger.info("Processing started")
        2025-12-22 10:30:45 | INFO | [3f2a9c1e] Processing started
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.WARNING

    log_format = logging.Formatter(
        '%(asctime)s | %(levelname)s | [%(run_id)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Prevent duplicate handlers if logger already configured
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(log_format)
        console_handler.addFilter(_RunIdFilter())
        logger.addHandler(console_handler)

    return logger


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def get_run_logger(
    run_id: Optional[str] = None,
    base_logger: Optional[logging.Logger] = None
) -> logging.LoggerAdapter:
    """
    Create a logger adapter with the run ID for tracing.

    Args:
        run_id: Identifier of the current invocation. A fresh one is
                generated when omitted.
        base_logger: Optional base logger to wrap. If None, uses the
                    "tuber" logger.

    Returns:
        LoggerAdapter configured to inject run_id into all log messages.
    """
    if base_logger is None:
        base_logger = logging.getLogger(LOGGER_NAME)

    return logging.LoggerAdapter(base_logger, {"run_id": run_id or new_run_id()})
