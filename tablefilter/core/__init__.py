"""
TableFilter Core Module.

Pure Python filtering logic with no UI toolkit dependencies.
This layer follows the Hexagonal Architecture pattern:

- domain/: Value objects (columns, predicate trees) and exceptions
- ports/: Abstract interfaces for the data source, the view and records
- types/: Codecs and the TypeRegistry
- filter/: Expression parsing, observables and the TableFilter
- choices/: Column value extraction for choice editors
- editors/: Column editors producing observable predicates
- services/: The FiltersHandler orchestrating all of the above

Usage:
    from tablefilter.core.filter import ExpressionParser, TableFilter
    from tablefilter.core.types import TypeRegistry
    from tablefilter.core.services import FiltersHandler
"""

# Re-export commonly used types for convenience
from .domain import (
    ColumnDescriptor,
    PredicateNode,
    TableFilterError,
    ParseError,
    RegexCompileError,
    MissingColumnError,
)

from .ports import (
    DataSourcePort,
    FilterableViewPort,
    RecordAccessor,
    TableChange,
    ChangeType,
)

from .types import TypeRegistry, create_default_registry

from .filter import (
    ExpressionParser,
    ObservablePredicate,
    TableFilter,
    UserFilter,
    AndFilter,
    OrFilter,
    NotFilter,
)

from .choices import ChoiceSet, ColumnValueExtractor, CustomChoice

from .editors import EditorKind, TextFilterEditor, ChoiceFilterEditor

from .services import FiltersHandler

__all__ = [
    # Domain
    'ColumnDescriptor',
    'PredicateNode',
    'TableFilterError',
    'ParseError',
    'RegexCompileError',
    'MissingColumnError',
    # Ports
    'DataSourcePort',
    'FilterableViewPort',
    'RecordAccessor',
    'TableChange',
    'ChangeType',
    # Types
    'TypeRegistry',
    'create_default_registry',
    # Filter
    'ExpressionParser',
    'ObservablePredicate',
    'TableFilter',
    'UserFilter',
    'AndFilter',
    'OrFilter',
    'NotFilter',
    # Choices
    'ChoiceSet',
    'ColumnValueExtractor',
    'CustomChoice',
    # Editors
    'EditorKind',
    'TextFilterEditor',
    'ChoiceFilterEditor',
    # Services
    'FiltersHandler',
]
