"""
Transaction export to CSV.
"""
from pathlib import Path
from typing import Iterable
import logging

from .errors import ExportError
from ..models.schema import Transaction

logger = logging.getLogger(__name__)

CSV_HEADER = "type,date,description,amount"


class CsvStatementExporter:
    """Writes transactions to a CSV file, one row per transaction."""

    def __init__(self, path: Path):
        if path is None:
            raise ValueError("Output path cannot be None.")
        self.path = Path(path)

    def write(self, transactions: Iterable[Transaction]) -> None:
        """
        Write transactions in the given order.

        Rows look like ``Payment,2024-03-10,Coffee Shop,$12.34``.

        Args:
            transactions: Transactions to export
        """
        try:
            with open(self.path, 'w', encoding='utf-8', newline='') as f:
                f.write(CSV_HEADER + "\n")
                count = 0
                for transaction in transactions:
                    f.write(f"{transaction}\n")
                    count += 1
        except OSError as e:
            raise ExportError(f"Writing to file failed: {e}") from e

        logger.info(f"Exported {count} transaction(s) to {self.path}")

    def confirmation_message(self) -> str:
        return f"Successfully exported as {self.path}"
