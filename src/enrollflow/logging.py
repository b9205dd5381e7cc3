"""Logging setup for enrollflow.

Every handler installed here runs records through ContactMaskingFilter, so
learner emails, phone numbers and relay tokens are redacted in the log files
even when a caller forgets to mask them.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "enrollflow"
ENV_LOG_DIR = "ENROLLFLOW_LOG_DIR"
ENV_LOG_LEVEL = "ENROLLFLOW_LOG_LEVEL"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "enrollflow.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Order matters: tokens before emails, emails before phone numbers
_MASKS = [
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"token=[a-zA-Z0-9._-]+"), "token=[REDACTED]"),
    (re.compile(r"([a-zA-Z0-9._%+-])[a-zA-Z0-9._%+-]*@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"), r"\1***@\2"),
    (re.compile(r"\+?\d[\d -]{6,}(\d{2})"), r"[PHONE]**\1"),
]


def mask_contact(text: str) -> str:
    """Redact contact details and credentials.

    Emails keep their first character and domain, phone numbers their last
    two digits. Bearer tokens and ``token=`` parameters are dropped.
    """
    for pattern, replacement in _MASKS:
        text = pattern.sub(replacement, text)
    return text


class ContactMaskingFilter(logging.Filter):
    """Masks the rendered message of every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_contact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``enrollflow`` logger.

    Installs a rotating file handler (and a console handler when asked),
    both masking contact details. Calling it again replaces the handlers.

    Args:
        log_dir: Directory for log files. Falls back to ENROLLFLOW_LOG_DIR,
                 then 'logs'.
        log_file: Log file name.
        max_bytes: Size at which the file rotates.
        backup_count: Rotated files kept.
        level: DEBUG, INFO, WARNING or ERROR. Falls back to
               ENROLLFLOW_LOG_LEVEL, then INFO.
        console: Also log to stderr.

    Returns:
        The ``enrollflow`` logger.
    """
    log_dir = Path(log_dir if log_dir is not None else os.environ.get(ENV_LOG_DIR, DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)

    level = level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    log_path = log_dir / log_file
    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    masking = ContactMaskingFilter()
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(masking)
        logger.addHandler(handler)

    logger.info("enrollflow logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, e.g. ``get_logger("workflow")``."""
    if not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
