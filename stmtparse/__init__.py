"""
Bank Statement Parser

Turns the text of Discover and TD Bank statements into an ordered list of
deposits and payments, exported as CSV. Institution layouts are described by
YAML templates interpreted by one shared extraction algorithm.
"""

__version__ = "1.0.0"

from .core.detectors import FormatRegistry, StatementIdentifier, detect_format
from .core.errors import (
    ExportError,
    ExtractionError,
    FormatError,
    InputError,
    StatementError,
    ValidationError,
    ViewError,
)
from .core.extract import StatementParser, parse_statement, sort_transactions
from .models.schema import Date, Deposit, MoneyAmount, Month, ParsedStatement, Payment, Transaction

__all__ = [
    "FormatRegistry",
    "StatementIdentifier",
    "detect_format",
    "StatementParser",
    "parse_statement",
    "sort_transactions",
    "Date",
    "Month",
    "MoneyAmount",
    "Transaction",
    "Deposit",
    "Payment",
    "ParsedStatement",
    "StatementError",
    "InputError",
    "FormatError",
    "ValidationError",
    "ExtractionError",
    "ExportError",
    "ViewError",
]
