"""
Tests for the shared extraction algorithm on Discover and TD Bank statements.
"""
import pytest

from ..core.errors import FormatError, InputError, ValidationError
from ..core.extract import (
    StatementParser,
    extract_body,
    extract_date_range,
    parse_statement,
    sort_transactions,
)
from ..models.schema import Date, Deposit, Month, ParsedStatement, Payment
from ..tools.inspect_lines import inspect_statement
from .statements import discover_statement, td_statement


def summarize(transactions):
    return [(type(t).__name__, str(t.date), t.description, str(t.amount)) for t in transactions]


class TestDiscoverStatement:
    """Marker-classified format: a '-$' on the line makes it a deposit."""

    def test_parse(self, discover_text, discover_format):
        result = parse_statement(discover_text, discover_format)

        assert isinstance(result, ParsedStatement)
        assert result.format_name == "Discover"
        assert result.start_date == Date(year=2024, month=Month.MARCH, day=1)
        assert result.end_date == Date(year=2024, month=Month.MARCH, day=31)
        assert summarize(result.deposits) == [
            ("Deposit", "2024-03-15", "INTERNET PAYMENT - THANK YOU", "$56.78"),
        ]
        assert summarize(result.payments) == [
            ("Payment", "2024-03-10", "Coffee Shop", "$12.34"),
            ("Payment", "2024-03-22", "AMAZON MKTPLACE  SEATTLE WA", "$1204.50"),
        ]

    def test_merged_and_sorted(self, discover_format):
        text = discover_statement("03/01/2024", "03/31/2024", [
            "03/10 GROCERY OUTLET $12.34",
            "03/15 STATEMENT CREDIT -$56.78",
        ])

        result = parse_statement(text, discover_format)

        assert len(result.deposits) == 1
        assert len(result.payments) == 1
        assert summarize(sort_transactions(result.transactions())) == [
            ("Deposit", "2024-03-15", "STATEMENT CREDIT", "$56.78"),
            ("Payment", "2024-03-10", "GROCERY OUTLET", "$12.34"),
        ]

    def test_cross_year_period(self, discover_format):
        text = discover_statement("12/15/2023", "01/14/2024", [
            "12/20 HOLIDAY GIFTS Merchandise $80.00",
            "01/05 GAS STATION Gasoline $40.10",
        ])

        result = parse_statement(text, discover_format)

        assert [str(t.date) for t in result.payments] == ["2023-12-20", "2024-01-05"]

    def test_period_longer_than_a_year(self, discover_format):
        text = discover_statement("01/15/2023", "02/14/2024", ["01/20 SHOP $1.00"])
        with pytest.raises(FormatError):
            parse_statement(text, discover_format)

    def test_impossible_transaction_date(self, discover_format):
        text = discover_statement("02/01/2023", "02/28/2023", ["02/29 SHOP $1.00"])
        with pytest.raises(ValidationError):
            parse_statement(text, discover_format)

    def test_unknown_description(self, discover_format):
        text = discover_statement("03/01/2024", "03/31/2024", ["03/02 Restaurants $9.99"])
        result = parse_statement(text, discover_format)
        assert result.payments[0].description == "Unknown"

    def test_inspect_reports_skipped_lines(self, discover_text, discover_format):
        reports = inspect_statement(discover_text, discover_format)

        assert len(reports) == 4
        assert not reports[0].matched
        assert reports[0].line.startswith("DATE PAYMENTS AND CREDITS AMOUNT")
        assert [r.kind for r in reports if r.matched] == ["Deposit", "Payment", "Payment"]

    def test_body_is_split_per_date(self, discover_text, discover_format):
        body = extract_body(discover_text, discover_format)
        lines = body.split("\n")
        assert lines[1].startswith("03/15 INTERNET PAYMENT")
        assert lines[2].startswith("03/10 TST*Coffee Shop")


class TestTDBankStatement:
    """Section-classified format: deposits come before the payments header."""

    def test_parse(self, td_text, td_format):
        result = parse_statement(td_text, td_format)

        assert result.format_name == "TD Bank"
        assert summarize(result.deposits) == [
            ("Deposit", "2024-03-15", "CCD DEPOSIT  PAYROLL ACME CORP", "$1056.78"),
        ]
        assert summarize(result.payments) == [
            ("Payment", "2024-03-10", "STARBUCKS 800 BOSTON", "$12.34"),
            ("Payment", "2024-03-12", "eTransfer to SAVINGS", "$200.00"),
        ]

    def test_date_range(self, td_text, td_format):
        start, end = extract_date_range(td_text, td_format)
        assert str(start) == "2024-03-01"
        assert str(end) == "2024-03-31"

    def test_cross_year_period(self, td_format):
        text = td_statement(
            "Dec 15 2023-Jan 14 2024",
            ["12/20 CCD DEPOSIT REFUND 10.00"],
            ["01/05 CHECK 101 25.00"],
        )

        result = parse_statement(text, td_format)

        assert summarize(result.deposits) == [("Deposit", "2023-12-20", "CCD DEPOSIT REFUND", "$10.00")]
        assert summarize(result.payments) == [("Payment", "2024-01-05", "CHECK 101", "$25.00")]

    def test_unknown_month_abbreviation(self, td_format):
        text = td_statement("Mar 1 2024-Abc 31 2024", [], [])
        with pytest.raises(FormatError, match="Abc"):
            parse_statement(text, td_format)

    def test_missing_payments_header(self, td_text, td_format):
        text = td_text.replace("Electronic Payments", "Electronic Withdrawals")
        with pytest.raises(FormatError):
            parse_statement(text, td_format)


class TestStatementParser:
    """Single-use parser contract."""

    def test_receive_once(self, td_text, td_format):
        parser = StatementParser(td_format)
        parser.receive_statement(td_text)

        with pytest.raises(InputError):
            parser.receive_statement(td_text)

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_statement(self, td_format, text):
        with pytest.raises(InputError):
            StatementParser(td_format).receive_statement(text)

    def test_snapshots_are_immutable(self, td_text, td_format):
        parser = StatementParser(td_format)
        parser.receive_statement(td_text)

        deposits = parser.get_deposits()
        assert isinstance(deposits, tuple)
        assert all(isinstance(d, Deposit) for d in deposits)
        assert all(isinstance(p, Payment) for p in parser.get_payments())

    def test_result_before_statement(self, td_format):
        with pytest.raises(InputError):
            StatementParser(td_format).result()

    def test_failed_parse_keeps_no_transactions(self, discover_format):
        text = discover_statement("02/01/2023", "02/28/2023", [
            "02/03 GOOD ONE $1.00",
            "02/29 IMPOSSIBLE $2.00",
        ])
        parser = StatementParser(discover_format)

        with pytest.raises(ValidationError):
            parser.receive_statement(text)

        assert parser.get_deposits() == ()
        assert parser.get_payments() == ()
        assert parser.start_date is None
        with pytest.raises(InputError):
            parser.result()
        with pytest.raises(InputError):
            parser.receive_statement(text)

    def test_missing_date_range(self, td_text, td_format):
        with pytest.raises(FormatError):
            StatementParser(td_format).receive_statement(td_text.replace("Statement Period", "Period"))

    def test_missing_body_markers(self, td_text, td_format):
        with pytest.raises(FormatError):
            StatementParser(td_format).receive_statement(td_text.replace("DAILY BALANCE SUMMARY", ""))
