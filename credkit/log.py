"""Logging setup on top of loguru."""

import re
import sys
from typing import Optional

from loguru import logger

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>\n{exception}"
)

SENSITIVE_PATTERNS = [
    (re.compile(r"(password\s*[:=]\s*['\"]?)([^'\"\s]+)(['\"]?)", re.IGNORECASE), r"\1***REDACTED***\3"),
    (re.compile(r"(token(?:_id)?\s*[:=]\s*['\"]?)([A-Za-z0-9_\-]{16,})(['\"]?)", re.IGNORECASE), r"\1***REDACTED***\3"),
    (re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}"), "***DIGEST***"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def _redacting_format(record) -> str:
    # Runs after loguru has interpolated the arguments into the message
    record["message"] = sanitize_message(record["message"])
    return _FMT


def token_hint(token_id: str) -> str:
    """Short, non-secret prefix of a token ID for log correlation."""
    return f"{token_id[:6]}..." if token_id else "-"


def setup_logging(level: Optional[str] = None, sink=sys.stderr) -> None:
    if level is None:
        from credkit.config import get_settings

        level = get_settings().log_level

    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format=_redacting_format,
        colorize=False,
        backtrace=False,
        diagnose=False,
    )
