"""
Pytest configuration and fixtures for TableFilter tests.

This module provides common test fixtures and configuration
for the TableFilter test suite.
"""
import pytest
import sys
from datetime import date
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from tablefilter.adapters.memory import InMemoryDataSource, InMemoryTableView  # noqa: E402
from tablefilter.config import ConfigManager  # noqa: E402
from tablefilter.core.domain import ColumnDescriptor  # noqa: E402
from tablefilter.core.filter import ExpressionParser  # noqa: E402
from tablefilter.core.types import TypeRegistry  # noqa: E402


PEOPLE_COLUMNS = ["name", "age", "city", "joined"]
PEOPLE_TYPES = [str, int, str, date]
PEOPLE_ROWS = [
    ["Alice", 34, "Paris", date(2020, 1, 15)],
    ["Bob", 27, "Lyon", date(2021, 6, 1)],
    ["Carol", 41, "Paris", date(2019, 3, 9)],
    ["Dave", 19, None, date(2022, 11, 30)],
    ["Eve", 27, "Nantes", None],
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep a TABLEFILTER_CONFIG from the environment out of the tests."""
    monkeypatch.delenv('TABLEFILTER_CONFIG', raising=False)


@pytest.fixture
def registry():
    """Default TypeRegistry."""
    return TypeRegistry.default()


@pytest.fixture
def parser(registry):
    """Case-sensitive parser over the default registry."""
    return ExpressionParser(registry)


@pytest.fixture
def config():
    """ConfigManager holding the defaults."""
    return ConfigManager()


@pytest.fixture
def name_column():
    return ColumnDescriptor(0, str, "name")


@pytest.fixture
def age_column():
    return ColumnDescriptor(1, int, "age")


@pytest.fixture
def people_source():
    """Five people: name, age, city (one null), joined (one null)."""
    return InMemoryDataSource(PEOPLE_COLUMNS, PEOPLE_TYPES, [list(row) for row in PEOPLE_ROWS])


@pytest.fixture
def people_view(people_source):
    view = InMemoryTableView(people_source)
    yield view
    view.dispose()
