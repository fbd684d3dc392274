import pytest

from ..core.detectors import FormatRegistry
from .statements import DISCOVER_STATEMENT, TD_STATEMENT


@pytest.fixture(scope="session")
def registry():
    return FormatRegistry()


@pytest.fixture
def discover_format(registry):
    return registry.get_template("discover_card_v1")


@pytest.fixture
def td_format(registry):
    return registry.get_template("tdbank_checking_v1")


@pytest.fixture
def discover_text():
    return DISCOVER_STATEMENT


@pytest.fixture
def td_text():
    return TD_STATEMENT
