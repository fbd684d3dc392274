"""
Data normalization and cleaning functions.
"""
import re
from typing import Callable, Dict, List, Tuple
import logging

from .errors import FormatError
from ..models.schema import Date, Month, MoneyAmount

logger = logging.getLogger(__name__)


MONTH_ABBREVIATIONS = {
    "Jan": Month.JANUARY,
    "Feb": Month.FEBRUARY,
    "Mar": Month.MARCH,
    "Apr": Month.APRIL,
    "May": Month.MAY,
    "Jun": Month.JUNE,
    "Jul": Month.JULY,
    "Aug": Month.AUGUST,
    "Sep": Month.SEPTEMBER,
    "Oct": Month.OCTOBER,
    "Nov": Month.NOVEMBER,
    "Dec": Month.DECEMBER,
}


def _to_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise FormatError(f"Date {what} is not a number: {value!r}")


def normalize_numeric_date(value: str) -> Date:
    """
    Parse a ``MM/DD/YYYY`` date string.

    Args:
        value: Raw date string

    Returns:
        Date object
    """
    parts = value.split("/")
    if len(parts) != 3:
        raise FormatError("Date does not have 3 parts: month, day, year.")

    month_index = _to_int(parts[0], "month")
    if not 1 <= month_index <= 12:
        raise FormatError(f"Cannot recognize month number: {parts[0]}")
    month = Month(month_index)
    day = _to_int(parts[1], "day")
    year = _to_int(parts[2], "year")

    return Date(year=year, month=month, day=day)


def normalize_abbreviated_date(value: str) -> Date:
    """
    Parse a ``Mon D YYYY`` date string such as ``Mar 1 2024``.

    Args:
        value: Raw date string

    Returns:
        Date object
    """
    parts = value.split(" ")
    if len(parts) != 3:
        raise FormatError("Date does not have 3 parts: month, day, year.")

    month_str = parts[0]
    day = _to_int(parts[1], "day")
    year = _to_int(parts[2], "year")

    month = MONTH_ABBREVIATIONS.get(month_str)
    if month is None:
        raise FormatError(f"Cannot recognize month string: {month_str}")

    return Date(year=year, month=month, day=day)


DATE_GRAMMARS: Dict[str, Callable[[str], Date]] = {
    "numeric": normalize_numeric_date,
    "abbreviated": normalize_abbreviated_date,
}


def normalize_date(value: str, grammar: str) -> Date:
    """
    Parse a full date string with one of the known statement date grammars.

    Args:
        value: Raw date string
        grammar: Grammar name ("numeric" or "abbreviated")

    Returns:
        Date object
    """
    try:
        parser = DATE_GRAMMARS[grammar]
    except KeyError:
        raise FormatError(f"Unknown date grammar: {grammar}")
    return parser(value.strip())


def validate_date_range(start: Date, end: Date) -> Tuple[Date, Date]:
    """
    Reject statement periods that look longer than one year.

    Only months are compared, so a range whose end month is at or after its
    start month in the following year is rejected even when it is shorter
    than twelve months by day count.

    Args:
        start: First day of the statement period
        end: Last day of the statement period

    Returns:
        The unchanged (start, end) pair
    """
    if start.year != end.year and (end.month.is_after(start.month) or end.month == start.month):
        raise FormatError(f"Date range is longer than one year: {start} - {end}")
    return start, end


def resolve_partial_date(start: Date, end: Date, month: int, day: int) -> Date:
    """
    Give a year to a month/day pair printed without one.

    Args:
        start: First day of the statement period
        end: Last day of the statement period
        month: Month number from the transaction line
        day: Day number from the transaction line

    Returns:
        Date inside the statement period's year(s)
    """
    return Date.within_range(start, end, Month.as_month(month), day)


def clean_description(description: str, banned_patterns: List[str]) -> str:
    """
    Strip statement noise from a transaction description.

    Commas become spaces, then every banned pattern is removed in order.

    Args:
        description: Raw description captured from the transaction line
        banned_patterns: Ordered regular expressions to delete

    Returns:
        Trimmed description, possibly empty
    """
    cleaned = description.replace(",", " ")
    for pattern in banned_patterns:
        cleaned = re.sub(pattern, "", cleaned)
    return cleaned.strip()


def normalize_money(dollars: str, cents: str) -> MoneyAmount:
    """
    Build an amount from captured dollar and cent digits.

    Args:
        dollars: Dollar digits, possibly with thousands separators ("1,234")
        cents: Exactly two cent digits

    Returns:
        MoneyAmount
    """
    return MoneyAmount(dollars=int(dollars.replace(",", "")), cents=int(cents))
