"""
Record Accessor Port.

The per-record view handed to predicates at evaluation time. A predicate
must not keep a reference to the accessor after the evaluation call.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
from abc import ABC, abstractmethod
from typing import Any

from ..domain.exceptions import MissingColumnError
from .data_source_port import DataSourcePort


class RecordAccessor(ABC):
    """Read access to the cells of a single record."""

    @abstractmethod
    def value_at(self, column: int) -> Any:
        """
        Get the value of a column for this record.

        Raises:
            MissingColumnError: If the record has no such column
        """

    def string_value_at(self, column: int) -> str:
        """Plain string form of a column value ('' for None)."""
        value = self.value_at(column)
        return "" if value is None else str(value)


class RowRecord(RecordAccessor):
    """
    Record accessor over one row of a DataSourcePort.

    Instances are cheap and can be reused by calling ``move_to``.
    """

    __slots__ = ('source', 'row')

    def __init__(self, source: DataSourcePort, row: int = 0):
        self.source = source
        self.row = row

    def move_to(self, row: int) -> 'RowRecord':
        self.row = row
        return self

    def value_at(self, column: int) -> Any:
        if column < 0 or column >= self.source.column_count():
            raise MissingColumnError(column)
        return self.source.value_at(self.row, column)


class SequenceRecord(RecordAccessor):
    """Record accessor over a plain sequence of values (mostly for tests)."""

    __slots__ = ('values',)

    def __init__(self, values):
        self.values = list(values)

    def value_at(self, column: int) -> Any:
        if column < 0 or column >= len(self.values):
            raise MissingColumnError(column)
        return self.values[column]
