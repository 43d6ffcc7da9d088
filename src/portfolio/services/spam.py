"""Spam checks for public form submissions."""

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

HONEYPOT_FIELD = "_hp_field"
TIMESTAMP_FIELD = "_timestamp"
MIN_SUBMIT_MS = 2000


class SpamError(Exception):
    """Submission rejected as likely spam."""


def check_spam(data: dict[str, Any], *, now_ms: int | None = None) -> None:
    """Reject filled honeypots and forms submitted too quickly.

    Args:
        data: Raw submitted form fields
        now_ms: Current time in milliseconds since the epoch

    Raises:
        SpamError: If the submission looks automated
    """
    honeypot = data.get(HONEYPOT_FIELD)
    if isinstance(honeypot, str) and honeypot.strip():
        logger.warning("Spam rejected: honeypot filled")
        raise SpamError("Invalid submission detected")

    timestamp = _parse_timestamp(data.get(TIMESTAMP_FIELD))
    if timestamp is not None:
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        if now_ms - timestamp < MIN_SUBMIT_MS:
            logger.warning("Spam rejected: submitted %d ms after load", now_ms - timestamp)
            raise SpamError("Submission too fast. Please try again.")


def _parse_timestamp(value: Any) -> float | None:
    """Form load time in ms; numbers and numeric strings are accepted."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def strip_spam_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Copy of data without the spam-check fields."""
    return {
        key: value
        for key, value in data.items()
        if key not in (HONEYPOT_FIELD, TIMESTAMP_FIELD)
    }
