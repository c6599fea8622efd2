"""
TableFilter Core Domain Module.

Pure Python value objects shared by the parser, the composition layer and
the choice extraction:

Value Objects (immutable, equality by value):
- ColumnDescriptor: column index and semantic type
- Leaf, And, Or, Not: predicate tree nodes

Exceptions:
- TableFilterError and its ParseError / RegexCompileError / MissingColumnError
  / ConfigurationError / ViewError specializations
"""
from .column import ColumnDescriptor
from .exceptions import (
    TableFilterError,
    ParseError,
    RegexCompileError,
    MissingColumnError,
    ConfigurationError,
    ViewError,
)
from .predicate import (
    PredicateNode,
    Leaf,
    And,
    Or,
    Not,
    MATCH_ALL,
    MATCH_NONE,
    all_of,
    any_of,
)

__all__ = [
    # Value Objects
    'ColumnDescriptor',
    'PredicateNode',
    'Leaf',
    'And',
    'Or',
    'Not',
    'MATCH_ALL',
    'MATCH_NONE',
    'all_of',
    'any_of',
    # Exceptions
    'TableFilterError',
    'ParseError',
    'RegexCompileError',
    'MissingColumnError',
    'ConfigurationError',
    'ViewError',
]
