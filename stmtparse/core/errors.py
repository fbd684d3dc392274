"""
Exception hierarchy for statement parsing and export.
"""


class StatementError(Exception):
    """Base class for every fatal condition raised by stmtparse."""


class InputError(StatementError, ValueError):
    """Missing or empty statement text, or a parser given a second statement."""


class FormatError(StatementError):
    """Statement text does not follow the layout the parser expects."""


class ValidationError(StatementError):
    """A value violates a calendar or money invariant.

    Not a ``ValueError`` subclass: pydantic validators re-raise it unchanged.
    """


class ExtractionError(StatementError):
    """The source document could not be turned into text."""


class ExportError(StatementError):
    """Writing the exported transactions failed."""


class ViewError(StatementError):
    """A progress message could not be delivered."""
