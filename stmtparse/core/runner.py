"""
End-to-end parsing orchestration.
"""
from pathlib import Path
from typing import Callable, List, Optional, Sequence
import logging

from .detectors import FormatRegistry, StatementIdentifier
from .extract import StatementParser, sort_transactions
from .exporters import CsvStatementExporter
from .loader import load_statement_text
from ..models.schema import Transaction

logger = logging.getLogger(__name__)


class StatementRunner:
    """Loads statements, parses them, and exports every transaction in one file.

    Progress is reported through ``view.render_message``.
    """

    def __init__(self, view, exporter: CsvStatementExporter,
                 registry: FormatRegistry = None,
                 loader: Callable[[Path], str] = load_statement_text):
        if view is None:
            raise ValueError("View cannot be None.")
        if exporter is None:
            raise ValueError("Exporter cannot be None.")

        self.view = view
        self.exporter = exporter
        self.registry = registry or FormatRegistry()
        self.loader = loader

    def run(self, paths: Sequence[Path], template_id: Optional[str] = None) -> List[Transaction]:
        """
        Process statements and export the merged transactions.

        Args:
            paths: Statement documents to read
            template_id: Force this format instead of identifying each statement

        Returns:
            All transactions, most recent first
        """
        if not paths:
            raise ValueError("At least one input path is required.")

        self.view.render_message("Welcome to the statement parser.\n")

        all_transactions: List[Transaction] = []
        for path in paths:
            all_transactions.extend(self._process(Path(path), template_id))

        ordered = sort_transactions(all_transactions)

        self.view.render_message("\n\nTrying to export CSV...")
        self.exporter.write(ordered)
        self.view.render_message(" Success!\n")
        self.view.render_message(self.exporter.confirmation_message())

        self.view.render_message("\n\nThank you for using the statement processor.\n")
        return ordered

    def _process(self, path: Path, template_id: Optional[str]) -> List[Transaction]:
        """Load, identify and parse one statement."""
        self.view.render_message(f"\nFile: {path}")

        self.view.render_message("\n\nTrying to import file...")
        text = self.loader(path)
        self.view.render_message(" Success!")

        if template_id:
            fmt = self.registry.get_template(template_id)
            identifier, parser = StatementIdentifier.from_format(fmt), StatementParser(fmt)
        else:
            identifier, parser = self.registry.select(text)
        self.view.render_message(f"\nStatement identified as type: {identifier.name}")

        self.view.render_message("\nTrying to parse statement...")
        parser.receive_statement(text)
        self.view.render_message(" Success!")

        statement = parser.result()
        self.view.render_message(f"\n\nFound {len(statement.deposits)} deposit(s).")
        self.view.render_message(f"\nFound {len(statement.payments)} payment(s).")
        logger.info(f"{path}: period {statement.start_date} - {statement.end_date}")

        return statement.transactions()


def run_statements(paths: Sequence[Path], out_path: Path, view,
                   template_id: Optional[str] = None,
                   templates_dir: Optional[Path] = None) -> List[Transaction]:
    """
    Parse statement documents and export them to a CSV file.

    Args:
        paths: Statement documents (``.pdf`` or ``.txt``)
        out_path: CSV file to write
        view: Receiver of progress messages
        template_id: Force this format
        templates_dir: Directory of YAML format templates

    Returns:
        All transactions, most recent first
    """
    runner = StatementRunner(view, CsvStatementExporter(out_path), FormatRegistry(templates_dir))
    return runner.run(paths, template_id)
