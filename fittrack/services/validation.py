"""
Input checks shared by the record services.

Everything here is side-effect free; the services decide which error to
raise when a check fails.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

from fittrack.core.errors import MissingField

# Local part: 2+ alphanumerics, optionally separated by single dots
GMAIL_PATTERN = re.compile(r"^[a-z0-9](\.?[a-z0-9]){1,}@gmail\.com$")

MIN_PASSWORD_LENGTH = 8


def normalize_username(username: str) -> str:
    return username.strip().lower()


def is_allowed_address(address: str) -> bool:
    """True if the address is a Gmail address once trimmed and lowercased"""
    return GMAIL_PATTERN.match(normalize_username(address)) is not None


def is_strong_password(password: str) -> bool:
    return len(password.strip()) >= MIN_PASSWORD_LENGTH


def is_blank(value: Any) -> bool:
    """Missing-field semantics: None, empty strings and zero count as absent"""
    if isinstance(value, str):
        return not value.strip()
    return value is None or value is False or value == 0


def require(message: str, *values: Any) -> None:
    """Raise MissingField if any of the values is absent"""
    if any(is_blank(value) for value in values):
        raise MissingField(message)


def coerce_number(value: Any) -> int | float:
    """
    Coerce client input to a number.

    Absent, empty and non-numeric input becomes 0 rather than failing.
    Whole numbers come back as int so they serialize without a trailing .0.
    """
    if value is None or isinstance(value, (list, dict)):
        return 0
    if isinstance(value, bool):
        return int(value)
    # Ints stay ints - float() overflows on very large JSON integers
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
    else:
        return 0

    if math.isnan(number) or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def is_negative(value: Any) -> bool:
    return coerce_number(value) < 0


def coerce_id(value: Any) -> Optional[int]:
    """Record ids arrive as JSON numbers or query strings"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp; naive values are taken as UTC"""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    """Current time in the same shape JavaScript's toISOString() produces"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
