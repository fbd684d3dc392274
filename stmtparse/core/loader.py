"""
Statement text loading using pdfplumber.
"""
import pdfplumber
from pathlib import Path
from typing import List
import logging

from .errors import ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".txt")

# Ligatures some statement PDFs emit in place of plain letters
LIGATURES = {
    'ﬁ': 'fi',
    'ﬂ': 'fl',
    'ﬀ': 'ff',
    'ﬃ': 'ffi',
    'ﬄ': 'ffl',
    'ﬆ': 'st',
    'ﬅ': 'st'
}


class PDFLoader:
    """Handles PDF loading and text extraction."""

    def __init__(self, pdf_path: Path):
        self.pdf_path = pdf_path
        self._pdf = None
        self._pages: List[str] = []

    def load(self) -> List[str]:
        """Load the PDF and extract the text of every page."""
        if self._pages:
            return self._pages

        try:
            self._pdf = pdfplumber.open(self.pdf_path)
            logger.info(f"Loaded PDF with {len(self._pdf.pages)} pages")

            for i, page in enumerate(self._pdf.pages, 1):
                text = self._normalize_text(page.extract_text() or "")
                self._pages.append(text)
                logger.debug(f"Page {i}: {len(text)} characters extracted")

            return self._pages

        except Exception as e:
            logger.error(f"Error loading PDF: {e}")
            raise ExtractionError(f"Failed to load PDF {self.pdf_path}: {e}") from e

    def get_text(self) -> str:
        """Text of the whole document, one page after another."""
        return "\n".join(self.load())

    def _normalize_text(self, text: str) -> str:
        """Replace ligature glyphs with the letters they stand for."""
        for ligature, replacement in LIGATURES.items():
            text = text.replace(ligature, replacement)
        return text

    def close(self):
        """Close the PDF file."""
        if self._pdf:
            self._pdf.close()
            self._pdf = None


def load_statement_text(path: Path) -> str:
    """
    Read the text contents of a statement document.

    Args:
        path: Path to a ``.pdf`` statement, or a ``.txt`` file holding text
            already extracted from one

    Returns:
        Statement text
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError(f"Unsupported file type '{suffix}': expected one of {', '.join(SUPPORTED_SUFFIXES)}")

    if suffix == ".txt":
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(f"Failed to read {path}: {e}") from e

    loader = PDFLoader(path)
    try:
        return loader.get_text()
    finally:
        loader.close()
