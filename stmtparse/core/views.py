"""
Progress message views.
"""
from typing import TextIO

from rich.console import Console

from .errors import ViewError


class TextView:
    """Appends progress messages verbatim to a text stream."""

    def __init__(self, destination: TextIO):
        if destination is None:
            raise ValueError("Destination cannot be None.")
        self.destination = destination

    def render_message(self, message: str) -> None:
        try:
            self.destination.write(message)
        except (OSError, ValueError) as e:
            raise ViewError("Transmission of the message to the destination failed") from e


class ConsoleView:
    """Prints progress messages through a rich console."""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def render_message(self, message: str) -> None:
        try:
            self.console.print(message, end="", markup=False, highlight=False)
        except OSError as e:
            raise ViewError("Transmission of the message to the console failed") from e
