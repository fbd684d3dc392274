"""
Debug tool for checking how a statement body is split into transactions.
"""
from typing import List, Optional
import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.extract import extract_body, extract_date_range, iter_candidate_lines, parse_transaction_line
from ..models.schema import StatementFormat, Transaction

logger = logging.getLogger(__name__)


class LineReport:
    """One candidate line and what it parsed into."""
    def __init__(self, number: int, kind: str, line: str, transaction: Optional[Transaction]):
        self.number = number
        self.kind = kind
        self.line = line
        self.transaction = transaction

    @property
    def matched(self) -> bool:
        return self.transaction is not None

    def __repr__(self):
        return f"LineReport({self.number}, {self.kind}, matched={self.matched}, line='{self.line}')"


def inspect_statement(statement: str, fmt: StatementFormat) -> List[LineReport]:
    """
    Run the extraction steps on a statement and keep every candidate line.

    Args:
        statement: Full statement text
        fmt: Format template

    Returns:
        One report per candidate line, matched or not
    """
    start, end = extract_date_range(statement, fmt)
    body = extract_body(statement, fmt)

    reports = []
    for number, (factory, line) in enumerate(iter_candidate_lines(body, fmt), 1):
        transaction = parse_transaction_line(line, fmt, start, end, factory)
        reports.append(LineReport(number, factory.__name__, line, transaction))

    logger.debug(f"Inspected {len(reports)} candidate line(s)")
    return reports


def render_line_report(reports: List[LineReport], console: Console, title: str = "Candidate lines"):
    """Print the reports as a table."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Line", overflow="fold")
    table.add_column("Parsed as", overflow="fold")

    for report in reports:
        if report.matched:
            parsed = f"[green]{escape(str(report.transaction))}[/green]"
        else:
            parsed = "[dim]skipped[/dim]"
        table.add_row(str(report.number), report.kind, escape(report.line.strip()), parsed)

    console.print(table)
