"""
Pydantic models for statement transactions and institution format templates.
"""
import re
from enum import Enum, IntEnum
from functools import total_ordering
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.errors import ValidationError


class Month(IntEnum):
    """Month of the calendar year, indexed from 1."""
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def as_month(cls, index: int) -> "Month":
        """
        Look up a month by its calendar index.

        Args:
            index: Month number, 1 through 12

        Returns:
            The matching Month
        """
        if index < 1 or index > 12:
            raise ValidationError(f"Invalid month index: {index}")
        return cls(index)

    def is_after(self, other: "Month") -> bool:
        """True if this month comes strictly after ``other`` in the calendar."""
        return self.value > other.value


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 100 != 0 and year % 4 == 0)


def days_in_month(year: int, month: Month) -> int:
    """Number of days in ``month`` of ``year`` under the Gregorian calendar."""
    if month == Month.FEBRUARY:
        return 29 if is_leap_year(year) else 28
    if month in (Month.APRIL, Month.JUNE, Month.SEPTEMBER, Month.NOVEMBER):
        return 30
    return 31


@total_ordering
class Date(BaseModel):
    """Calendar date.

    Ordering is descending: a later date compares as less than an earlier
    one, so ``sorted()`` yields the most recent date first.
    """
    model_config = ConfigDict(frozen=True)

    year: int
    month: Month
    day: int

    @field_validator('month', mode='before')
    @classmethod
    def coerce_month(cls, v):
        if isinstance(v, Month):
            return v
        return Month.as_month(int(v))

    @model_validator(mode='after')
    def validate_day(self):
        """Reject month/day combinations that do not exist in the year."""
        if self.day < 1 or self.day > days_in_month(self.year, self.month):
            raise ValidationError(
                f"Day does not exist in month: {self.year:04d}-{int(self.month):02d}-{self.day:02d}"
            )
        return self

    @classmethod
    def within_range(cls, start: "Date", end: "Date", month: Month, day: int) -> "Date":
        """
        Build the date with the given month and day that falls inside a range.

        Args:
            start: First day of the range
            end: Last day of the range, at most one year after ``start``
            month: Month of the new date
            day: Day of the new date

        Returns:
            Date whose year is taken from ``start`` or ``end``
        """
        if start.year == end.year:
            return cls(year=start.year, month=month, day=day)

        if end.month.is_after(start.month) or end.month == start.month:
            raise ValidationError("Date range is longer than one year.")

        # Tail of the range belongs to the start year, head to the end year
        if month.is_after(start.month) or month == start.month:
            return cls(year=start.year, month=month, day=day)
        return cls(year=end.year, month=month, day=day)

    def sort_key(self) -> Tuple[int, int, int]:
        """Chronological (year, month, day) tuple."""
        return (self.year, int(self.month), self.day)

    def __lt__(self, other: "Date") -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __str__(self) -> str:
        return f"{self.year:04d}-{int(self.month):02d}-{self.day:02d}"


def _whole_number(value, field: str) -> int:
    try:
        whole = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Amount {field} is not a whole number: {value!r}")
    if not isinstance(value, str) and whole != value:
        raise ValidationError(f"Amount {field} is not a whole number: {value!r}")
    return whole


class MoneyAmount(BaseModel):
    """Non-negative amount of money in dollars and cents."""
    model_config = ConfigDict(frozen=True)

    dollars: int
    cents: int

    @model_validator(mode='before')
    @classmethod
    def normalize_minor_units(cls, data):
        """Fold ``100 * dollars + cents`` into canonical dollars and cents."""
        if isinstance(data, dict):
            dollars = _whole_number(data.get('dollars', 0), 'dollars')
            cents = _whole_number(data.get('cents', 0), 'cents')
            total_cents = 100 * dollars + cents
            if total_cents < 0:
                raise ValidationError(f"Amount cannot be negative: {total_cents} cents")
            data = {'dollars': total_cents // 100, 'cents': total_cents % 100}
        return data

    @property
    def total_cents(self) -> int:
        return 100 * self.dollars + self.cents

    def __str__(self) -> str:
        return f"${self.dollars}.{self.cents:02d}"


class TransactionType(str, Enum):
    """Kind of monetary transaction."""
    DEPOSIT = "Deposit"
    PAYMENT = "Payment"

    def __str__(self) -> str:
        return self.value


class Transaction(BaseModel):
    """Individual transaction record. Build through ``Deposit.make`` or ``Payment.make``."""
    model_config = ConfigDict(frozen=True)

    type: TransactionType
    date: Date
    description: str
    amount: MoneyAmount

    @field_validator('description')
    @classmethod
    def default_description(cls, v):
        return v if v.strip() else "Unknown"

    @classmethod
    def make(cls, date: Date, description: str, amount: MoneyAmount) -> "Transaction":
        """Factory for the transaction kind this class represents."""
        return cls(date=date, description=description, amount=amount)

    def __str__(self) -> str:
        return f"{self.type},{self.date},{self.description},{self.amount}"


class Deposit(Transaction):
    """Money coming into the account."""
    type: Literal[TransactionType.DEPOSIT] = TransactionType.DEPOSIT


class Payment(Transaction):
    """Money going out of the account."""
    type: Literal[TransactionType.PAYMENT] = TransactionType.PAYMENT


class ParsedStatement(BaseModel):
    """Everything extracted from one statement."""
    model_config = ConfigDict(frozen=True)

    format_name: str
    start_date: Date
    end_date: Date
    deposits: Tuple[Deposit, ...] = ()
    payments: Tuple[Payment, ...] = ()

    def transactions(self) -> List[Transaction]:
        """Deposits followed by payments, each in extraction order."""
        return [*self.deposits, *self.payments]


def _check_regex(pattern: str) -> str:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid regular expression {pattern!r}: {e}")
    return pattern


class IdentifierConfig(BaseModel):
    """Substring that only this institution's statements contain."""
    must_contain: str = Field(min_length=1)


class DateRangeConfig(BaseModel):
    """Where the covering period is printed and how its dates are written."""
    pattern: str
    grammar: Literal["numeric", "abbreviated"]

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v):
        return _check_regex(v)


class Substitution(BaseModel):
    """Regex substitution applied to the statement body."""
    pattern: str
    replacement: str = ""

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v):
        return _check_regex(v)


class BodyConfig(BaseModel):
    """Anchors around the transaction listing and its cleanup steps."""
    start_marker: str = Field(min_length=1)
    end_marker: str = Field(min_length=1)
    substitutions: List[Substitution] = Field(default_factory=list)


class TransactionGroups(BaseModel):
    """Capture group numbers within the transaction line pattern."""
    month: int = 1
    day: int = 2
    description: int = 3
    dollars: int = 4
    cents: int = 5


class TransactionConfig(BaseModel):
    pattern: str
    groups: TransactionGroups = Field(default_factory=TransactionGroups)

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v):
        return _check_regex(v)


class ClassificationConfig(BaseModel):
    """How deposits are told apart from payments.

    ``marker``: a line containing ``marker`` is a deposit, otherwise a payment.
    ``section``: text before the first ``header_pattern`` match holds deposits,
    text after it holds payments.
    """
    strategy: Literal["marker", "section"]
    marker: Optional[str] = None
    header_pattern: Optional[str] = None

    @model_validator(mode='after')
    def check_strategy_settings(self):
        if self.strategy == "marker" and not self.marker:
            raise ValueError("'marker' strategy requires a marker")
        if self.strategy == "section":
            if not self.header_pattern:
                raise ValueError("'section' strategy requires a header_pattern")
            _check_regex(self.header_pattern)
        return self


class StatementFormat(BaseModel):
    """One institution's statement layout, loaded from a YAML template."""
    template_id: str
    name: str
    priority: int = 100
    identifier: IdentifierConfig
    date_range: DateRangeConfig
    body: BodyConfig
    transaction: TransactionConfig
    banned_patterns: List[str] = Field(default_factory=list)
    classification: ClassificationConfig

    @field_validator('banned_patterns')
    @classmethod
    def validate_banned_patterns(cls, v):
        for pattern in v:
            _check_regex(pattern)
        return v
