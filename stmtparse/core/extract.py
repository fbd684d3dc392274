"""
Shared statement extraction algorithm, driven by a format template.
"""
import re
from typing import Iterator, List, Optional, Tuple, Type
import logging

from .errors import FormatError, InputError
from .normalize import (
    clean_description,
    normalize_date,
    normalize_money,
    resolve_partial_date,
    validate_date_range,
)
from ..models.schema import (
    Date,
    Deposit,
    ParsedStatement,
    Payment,
    StatementFormat,
    Transaction,
)

logger = logging.getLogger(__name__)


def extract_date_range(statement: str, fmt: StatementFormat) -> Tuple[Date, Date]:
    """
    Find the period a statement covers.

    Args:
        statement: Full statement text
        fmt: Format template

    Returns:
        (start, end) dates
    """
    pattern = re.compile(fmt.date_range.pattern)
    match = pattern.search(statement)
    if not match or pattern.groups != 2:
        raise FormatError("Cannot find date range in statement.")

    start = normalize_date(match.group(1), fmt.date_range.grammar)
    end = normalize_date(match.group(2), fmt.date_range.grammar)
    logger.debug(f"{fmt.name} statement period: {start} - {end}")

    return validate_date_range(start, end)


def extract_body(statement: str, fmt: StatementFormat) -> str:
    """
    Cut the transaction listing out of a statement and clean it up.

    Args:
        statement: Full statement text
        fmt: Format template

    Returns:
        Body text with one candidate transaction per line
    """
    start_index = statement.find(fmt.body.start_marker)
    end_index = statement.find(fmt.body.end_marker)
    if start_index == -1 or end_index == -1:
        raise FormatError(
            f"Cannot find transaction section between "
            f"'{fmt.body.start_marker}' and '{fmt.body.end_marker}'"
        )

    body = statement[start_index:end_index]
    for substitution in fmt.body.substitutions:
        body = re.sub(substitution.pattern, substitution.replacement, body)

    return body


def iter_candidate_lines(body: str, fmt: StatementFormat) -> Iterator[Tuple[Type[Transaction], str]]:
    """
    Split a cleaned body into lines and decide each line's transaction kind.

    Args:
        body: Output of ``extract_body``
        fmt: Format template

    Yields:
        (Deposit or Payment class, candidate line)
    """
    classification = fmt.classification

    if classification.strategy == "marker":
        for line in body.split("\n"):
            if classification.marker in line:
                yield Deposit, line
            else:
                yield Payment, line
        return

    header = re.search(classification.header_pattern, body)
    if not header:
        raise FormatError(f"Cannot find payments header in {fmt.name} statement.")

    for line in body[:header.start()].strip().split("\n"):
        yield Deposit, line
    for line in body[header.end():].strip().split("\n"):
        yield Payment, line


def parse_transaction_line(line: str, fmt: StatementFormat, start: Date, end: Date,
                           factory: Type[Transaction]) -> Optional[Transaction]:
    """
    Turn one candidate line into a transaction.

    Args:
        line: Candidate line
        fmt: Format template
        start: First day of the statement period
        end: Last day of the statement period
        factory: Deposit or Payment

    Returns:
        Transaction, or None if the line is not a transaction
    """
    match = re.search(fmt.transaction.pattern, line)
    if not match:
        return None

    groups = fmt.transaction.groups
    date = resolve_partial_date(start, end, int(match.group(groups.month)), int(match.group(groups.day)))
    description = clean_description(match.group(groups.description), fmt.banned_patterns)
    amount = normalize_money(match.group(groups.dollars), match.group(groups.cents))

    return factory.make(date, description, amount)


class StatementParser:
    """Parses the text of one statement in a given format.

    An instance accepts exactly one statement. Results are only published
    once the whole statement has parsed; a failed parse leaves none behind.
    """

    def __init__(self, fmt: StatementFormat):
        self.fmt = fmt
        self._received = False
        self._failed = False
        self._deposits: List[Deposit] = []
        self._payments: List[Payment] = []
        self.start_date: Optional[Date] = None
        self.end_date: Optional[Date] = None

    def receive_statement(self, statement: str) -> None:
        """
        Parse a statement's text contents.

        Args:
            statement: Full statement text
        """
        if not statement:
            raise InputError("Statement cannot be empty.")

        if self._received:
            raise InputError("Already received statement.")
        self._received = True

        try:
            start, end = extract_date_range(statement, self.fmt)
            body = extract_body(statement, self.fmt)

            deposits: List[Deposit] = []
            payments: List[Payment] = []
            dropped = 0
            for factory, line in iter_candidate_lines(body, self.fmt):
                transaction = parse_transaction_line(line, self.fmt, start, end, factory)
                if transaction is None:
                    dropped += 1
                    logger.debug(f"Skipping non-transaction line: {line!r}")
                elif isinstance(transaction, Deposit):
                    deposits.append(transaction)
                else:
                    payments.append(transaction)
        except Exception:
            self._failed = True
            raise

        self.start_date, self.end_date = start, end
        self._deposits = deposits
        self._payments = payments

        logger.info(
            f"{self.fmt.name}: {len(self._deposits)} deposit(s), "
            f"{len(self._payments)} payment(s), {dropped} line(s) skipped"
        )

    def get_deposits(self) -> Tuple[Deposit, ...]:
        return tuple(self._deposits)

    def get_payments(self) -> Tuple[Payment, ...]:
        return tuple(self._payments)

    def result(self) -> ParsedStatement:
        """Snapshot of the parsed statement."""
        if not self._received:
            raise InputError("No statement to parse. Provide one with receive_statement().")
        if self._failed:
            raise InputError("Statement could not be parsed.")
        return ParsedStatement(
            format_name=self.fmt.name,
            start_date=self.start_date,
            end_date=self.end_date,
            deposits=self.get_deposits(),
            payments=self.get_payments(),
        )


def parse_statement(statement: str, fmt: StatementFormat) -> ParsedStatement:
    """
    Parse statement text in the given format.

    Args:
        statement: Full statement text
        fmt: Format template

    Returns:
        ParsedStatement with deposits and payments in extraction order
    """
    parser = StatementParser(fmt)
    parser.receive_statement(statement)
    return parser.result()


def sort_transactions(transactions) -> List[Transaction]:
    """Most recent first; transactions on the same date keep their order."""
    return sorted(transactions, key=lambda t: t.date)
