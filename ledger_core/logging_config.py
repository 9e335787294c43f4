"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for ledger validation.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module if hasattr(record, 'module') else record.name,
            "message": record.getMessage(),
            "transaction": getattr(record, 'transaction', None),
            "check": getattr(record, 'check', None),
            "account": getattr(record, 'account', None),
            "extra": getattr(record, 'extra', None)
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = "ledger_core",
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup logging for the ledger core.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the logger
        log_format: "json" for structured output, "text" for plain lines
        log_file: Path of a log file, logs go to stderr if not given

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()

    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def setup_logging_from_config() -> logging.Logger:
    """Setup logging with the values of the global configuration"""
    from .config import get_config

    config = get_config()
    return setup_logging(level=config.log_level, log_format=config.log_format,
                         log_file=config.log_file)


def get_logger(name: str = "ledger_core") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_validation_failure(logger: logging.Logger, message: str,
                           transaction: Optional[str] = None, check: Optional[str] = None,
                           account: Optional[str] = None, extra: Optional[dict] = None):
    """
    Log a failed validation check with structured data at DEBUG level.

    Args:
        logger: Logger instance
        message: Validation message
        transaction: First line of the transaction being validated
        check: Name of the failing check
        account: Account involved, if any
        extra: Additional structured data
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    record = logger.makeRecord(
        logger.name, logging.DEBUG,
        __name__, 0, message, (), None
    )

    if transaction:
        record.transaction = transaction
    if check:
        record.check = check
    if account:
        record.account = account
    if extra:
        record.extra = extra

    logger.handle(record)
