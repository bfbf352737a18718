"""
Display formatting helpers for map markers and the tracker panel.

- commafy: thousands-separated numbers
- friendly_date: epoch milliseconds to a readable date-time
- abbreviate_cases: short badge text for a country's case count
"""

import logging
import numbers
from datetime import datetime, tzinfo
from typing import Optional

from .config.constants import (
    FRIENDLY_DATE_FORMAT,
    MILLION_THRESHOLD,
    PLACEHOLDER,
    THOUSAND_THRESHOLD,
    THOUSANDS_SEPARATOR,
)

logger = logging.getLogger(__name__)


def _as_number(value):
    """Coerce value to an int (or float with a fraction), or None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value) if value.is_integer() else value
    return None


def commafy(value, separator: str = THOUSANDS_SEPARATOR) -> str:
    """
    Insert a grouping separator every three digits.

    Args:
        value: Integer-like value (None and non-numeric values yield the placeholder)
        separator: Grouping separator

    Returns:
        Formatted string, e.g. 1234567 -> "1,234,567"
    """
    number = _as_number(value)
    if number is None:
        return PLACEHOLDER

    formatted = f"{number:,}"
    if separator != ",":
        formatted = formatted.replace(",", separator)
    return formatted


def friendly_date(value, fmt: str = FRIENDLY_DATE_FORMAT, tz: Optional[tzinfo] = None) -> str:
    """
    Convert an epoch-millisecond timestamp to a readable date-time string.

    Local time is used unless a timezone is given. Absent or unconvertible
    input yields the placeholder.
    """
    if value is None or isinstance(value, bool):
        return PLACEHOLDER

    try:
        moment = datetime.fromtimestamp(float(value) / 1000, tz=tz)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        logger.debug(f"Could not format timestamp {value!r}: {e}")
        return PLACEHOLDER

    return moment.strftime(fmt)


def abbreviate_cases(cases) -> str:
    """
    Build the marker badge text for a case count.

    Truncates rather than rounds: above 1,000 the last three digits are
    dropped and "k+" appended; above 1,000,000 the last five characters of
    that string are dropped and "m+" appended. A fractional count is sliced
    as written, decimals included.

        500 -> "500", 1500 -> "1k+", 1000000 -> "1000k+", 1500000 -> "1m+"
        1500.7 -> "150k+"
    """
    number = _as_number(cases)
    if number is None:
        return PLACEHOLDER

    cases_string = f"{number}"

    if number > THOUSAND_THRESHOLD:
        cases_string = f"{cases_string[:-3]}k+"

    if number > MILLION_THRESHOLD:
        cases_string = f"{cases_string[:-5]}m+"

    return cases_string
