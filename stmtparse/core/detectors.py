"""
Statement format identification and template registry.
"""
import yaml
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
import logging

from pydantic import ValidationError as TemplateValidationError

from .errors import FormatError, InputError
from .extract import StatementParser
from ..models.schema import StatementFormat

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class StatementIdentifier:
    """Recognizes one institution's statements by a distinguishing substring."""

    def __init__(self, name: str, must_contain: str):
        self.name = name
        self.must_contain = must_contain

    @classmethod
    def from_format(cls, fmt: StatementFormat) -> "StatementIdentifier":
        return cls(fmt.name, fmt.identifier.must_contain)

    def matches(self, statement: str) -> bool:
        """
        Check whether statement text follows this institution's layout.

        Args:
            statement: Full statement text

        Returns:
            True if the distinguishing substring is present
        """
        if statement is None:
            raise InputError("Statement cannot be None.")
        return self.must_contain in statement

    def __repr__(self):
        return f"StatementIdentifier('{self.name}', must_contain='{self.must_contain}')"


ParserFactory = Callable[[], StatementParser]


class FormatRegistry:
    """Ordered (identifier, parser factory) pairs built from YAML templates.

    Selection is first match in ascending ``priority`` order, ties broken by
    ``template_id``.
    """

    def __init__(self, templates_dir: Path = None):
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.templates: Dict[str, StatementFormat] = {}
        self.ordered: List[StatementFormat] = []
        self.entries: List[Tuple[StatementIdentifier, ParserFactory]] = []
        self._load_templates()

    def _load_templates(self):
        """Load all available templates."""
        if not self.templates_dir.exists():
            logger.warning(f"Templates directory not found: {self.templates_dir}")
            return

        for yaml_file in sorted(self.templates_dir.glob("*.yaml")):
            try:
                with open(yaml_file, 'r', encoding='utf-8') as f:
                    fmt = StatementFormat.model_validate(yaml.safe_load(f))
            except (OSError, yaml.YAMLError, TemplateValidationError) as e:
                logger.error(f"Error loading template {yaml_file}: {e}")
                continue

            if fmt.template_id in self.templates:
                logger.warning(f"Duplicate template id {fmt.template_id} in {yaml_file}, ignoring")
                continue
            self.templates[fmt.template_id] = fmt
            logger.debug(f"Loaded template: {fmt.template_id}")

        self.ordered = sorted(self.templates.values(), key=lambda f: (f.priority, f.template_id))
        self.entries = [
            (StatementIdentifier.from_format(fmt), partial(StatementParser, fmt))
            for fmt in self.ordered
        ]

    def select(self, statement: str) -> Tuple[StatementIdentifier, StatementParser]:
        """
        Pick the format for a statement.

        Args:
            statement: Full statement text

        Returns:
            The matching identifier and a fresh parser for its format
        """
        for identifier, make_parser in self.entries:
            if identifier.matches(statement):
                logger.info(f"Statement matches format: {identifier.name}")
                return identifier, make_parser()

        raise FormatError("Could not identify statement as a recognized type.")

    def get_template(self, template_id: str) -> StatementFormat:
        """Get a format template by ID."""
        try:
            return self.templates[template_id]
        except KeyError:
            raise FormatError(f"Template not found: {template_id}")

    def list_templates(self) -> List[StatementFormat]:
        """Templates in selection order."""
        return list(self.ordered)


def detect_format(statement: str, templates_dir: Optional[Path] = None) -> StatementFormat:
    """
    Convenience function to identify the format of statement text.

    Args:
        statement: Full statement text
        templates_dir: Directory of YAML templates (packaged templates by default)

    Returns:
        The first matching StatementFormat
    """
    identifier, parser = FormatRegistry(templates_dir).select(statement)
    return parser.fmt
