"""
TableFilter

Expression-driven filtering for tabular views: users type short expressions
(``> 5``, ``~ Sm*th``, ``!= red``) or pick values per column, and the
TableFilter installs the AND of all column predicates on the view.

Usage:
    from tablefilter import FiltersHandler
    from tablefilter.adapters.memory import InMemoryDataSource, InMemoryTableView

    source = InMemoryDataSource(["name", "age"], [str, int], rows)
    view = InMemoryTableView(source)
    handler = FiltersHandler(source, view)
    handler.editor(1).set_text(">= 18")
"""

__version__ = "1.0.0"

from .core import (
    ColumnDescriptor,
    ParseError,
    RegexCompileError,
    TableFilterError,
    TypeRegistry,
    ExpressionParser,
    ObservablePredicate,
    TableFilter,
    UserFilter,
    ColumnValueExtractor,
    CustomChoice,
    EditorKind,
    TextFilterEditor,
    ChoiceFilterEditor,
    FiltersHandler,
)
from .config import ConfigManager
from .infrastructure.logging import configure_logging

__all__ = [
    '__version__',
    'ColumnDescriptor',
    'ParseError',
    'RegexCompileError',
    'TableFilterError',
    'TypeRegistry',
    'ExpressionParser',
    'ObservablePredicate',
    'TableFilter',
    'UserFilter',
    'ColumnValueExtractor',
    'CustomChoice',
    'EditorKind',
    'TextFilterEditor',
    'ChoiceFilterEditor',
    'FiltersHandler',
    'ConfigManager',
    'configure_logging',
]
