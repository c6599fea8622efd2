"""
Data Source Port Interface.

Abstract interface for the tabular data filtered by TableFilter, plus the
change events a data source publishes to its listeners.

This is a PURE PYTHON module with NO UI toolkit dependencies,
enabling true unit testing and clear separation of concerns.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional


class ChangeType(Enum):
    """Kinds of change a data source can report."""
    ROWS_INSERTED = "rows_inserted"
    ROWS_DELETED = "rows_deleted"
    ROWS_UPDATED = "rows_updated"
    STRUCTURE_CHANGED = "structure_changed"


@dataclass(frozen=True)
class TableChange:
    """
    Change notification emitted by a data source.

    Attributes:
        change_type: What happened
        first_row: First affected row (inclusive), -1 for structure changes
        last_row: Last affected row (inclusive), -1 for structure changes
        column: Affected column for updates, None if all columns
    """
    change_type: ChangeType
    first_row: int = -1
    last_row: int = -1
    column: Optional[int] = None

    @classmethod
    def inserted(cls, first_row: int, last_row: int) -> 'TableChange':
        return cls(ChangeType.ROWS_INSERTED, first_row, last_row)

    @classmethod
    def deleted(cls, first_row: int, last_row: int) -> 'TableChange':
        return cls(ChangeType.ROWS_DELETED, first_row, last_row)

    @classmethod
    def updated(cls, first_row: int, last_row: int, column: Optional[int] = None) -> 'TableChange':
        return cls(ChangeType.ROWS_UPDATED, first_row, last_row, column)

    @classmethod
    def structure_changed(cls) -> 'TableChange':
        return cls(ChangeType.STRUCTURE_CHANGED)

    @property
    def row_range(self) -> range:
        """Affected rows as a range (empty for structure changes)."""
        if self.first_row < 0:
            return range(0)
        return range(self.first_row, self.last_row + 1)

    @property
    def is_append_only(self) -> bool:
        """True if the change only adds rows."""
        return self.change_type == ChangeType.ROWS_INSERTED


DataSourceListener = Callable[[TableChange], None]


class DataSourcePort(ABC):
    """
    Abstract tabular data source.

    Rows and columns are addressed by model index. Implementations keep a
    list of listeners and notify them synchronously of every change.
    """

    def __init__(self):
        self._listeners: List[DataSourceListener] = []

    @abstractmethod
    def column_count(self) -> int:
        """Number of columns."""

    @abstractmethod
    def row_count(self) -> int:
        """Number of rows."""

    @abstractmethod
    def value_at(self, row: int, column: int) -> Any:
        """
        Get a cell value.

        Args:
            row: Model row index
            column: Model column index

        Returns:
            The cell value (None for empty cells)
        """

    @abstractmethod
    def column_type(self, column: int) -> Any:
        """Semantic (Python) type of the values in a column."""

    def column_name(self, column: int) -> Optional[str]:
        """Column header, None when the source has no headers."""
        return None

    def add_listener(self, listener: DataSourceListener) -> None:
        """Register a change listener (ignored if already registered)."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: DataSourceListener) -> None:
        """Unregister a change listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def fire_change(self, change: TableChange) -> None:
        """Notify all listeners of a change."""
        for listener in list(self._listeners):
            listener(change)
