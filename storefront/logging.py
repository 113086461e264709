"""
Logging for the storefront services.

The gateway and the client both log remote failures; what they log is
Shopify data (gid:// identifiers, GraphQL error lists, product handles), so
everything that reaches a log line goes through the helpers below first.

Usage:
    from storefront.logging import get_logger, sanitize_id_for_logging
    logger = get_logger(__name__)

    logger.info("Created remote cart %s", sanitize_id_for_logging(cart.id))
    logger.error("cartCreate failed: %s", summarize_errors_for_logging(e.details))
"""

import logging
import os
import sys
from functools import cache
from typing import Any, Dict, Iterable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel prefixes every line with its own timestamp and request id
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# One line per proxied query would drown the cart logs
QUIET_LOGGERS = ("httpx", "httpcore")

GID_TAIL_LENGTH = 12
MAX_LOGGED_ERRORS = 3


def _get_log_level() -> int:
    """LOG_LEVEL from the environment; unknown names fall back to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()

    # Respect handlers installed by pytest or the hosting runtime
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    on_vercel = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if on_vercel else LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (typically ``__name__``)."""
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Neutralize control characters that could forge log entries (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Shorten a Shopify identifier for logging.

    ``gid://shopify/Cart/<token>`` ids share a long prefix; the distinguishing
    part is the tail, so the last 12 characters are kept.

    Returns:
        Escaped tail of the identifier, or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[-GID_TAIL_LENGTH:] if len(safe_value) > GID_TAIL_LENGTH else safe_value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Escape and truncate free text (handles, titles, upstream messages)."""
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def summarize_errors_for_logging(errors: Iterable[Dict[str, Any]], max_items: int = MAX_LOGGED_ERRORS) -> str:
    """
    One-line digest of a GraphQL ``errors`` or ``userErrors`` list.

    Only the messages are kept (locations and extensions are noise in logs),
    each escaped and truncated; extra entries are counted, not printed.

    Example:
        summarize_errors_for_logging([{"message": "Cart not found"}])
        # "Cart not found"
    """
    errors = list(errors or [])
    if not errors:
        return "N/A"
    messages = [
        sanitize_string_for_logging(str(e.get("message") if isinstance(e, dict) else e), max_length=80)
        for e in errors[:max_items]
    ]
    summary = "; ".join(messages)
    if len(errors) > max_items:
        summary += f" (+{len(errors) - max_items} more)"
    return summary


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
    "summarize_errors_for_logging",
]
