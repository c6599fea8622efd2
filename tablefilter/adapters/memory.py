# -*- coding: utf-8 -*-
"""
In-Memory Adapters

List-backed implementations of the data source and view ports, for
headless use (scripts, services) and for tests.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence

from ..core.domain.exceptions import MissingColumnError, ViewError
from ..core.domain.predicate import PredicateNode
from ..core.ports.data_source_port import DataSourcePort, TableChange
from ..core.ports.record_port import RowRecord
from ..core.ports.view_port import FilterableViewPort

logger = logging.getLogger('TableFilter.Adapters.Memory')


class InMemoryDataSource(DataSourcePort):
    """
    Table stored as a list of rows.

    Every mutation notifies the listeners with the matching TableChange.

    Example:
        >>> source = InMemoryDataSource(["name", "age"], [str, int],
        ...                             [["Alice", 30], ["Bob", 25]])
        >>> source.append_rows([["Carol", 41]])
    """

    def __init__(self, column_names: Sequence[str], column_types: Optional[Sequence[Any]] = None,
                 rows: Optional[Iterable[Sequence[Any]]] = None):
        super().__init__()
        self._names: List[str] = []
        self._types: List[Any] = []
        self._rows: List[List[Any]] = []
        self._set_structure(column_names, column_types, rows)

    def _set_structure(self, column_names, column_types, rows) -> None:
        names = list(column_names)
        types = list(column_types) if column_types is not None else [str] * len(names)
        if len(types) != len(names):
            raise ValueError(f"{len(names)} column names but {len(types)} column types")
        self._names = names
        self._types = types
        self._rows = [list(row) for row in rows or ()]

    # DataSourcePort -----------------------------------------------------------

    def column_count(self) -> int:
        return len(self._names)

    def row_count(self) -> int:
        return len(self._rows)

    def value_at(self, row: int, column: int) -> Any:
        if column < 0 or column >= len(self._names):
            raise MissingColumnError(column)
        values = self._rows[row]
        return values[column] if column < len(values) else None

    def column_type(self, column: int) -> Any:
        return self._types[column]

    def column_name(self, column: int) -> Optional[str]:
        return self._names[column]

    # Mutations ----------------------------------------------------------------

    def row(self, row: int) -> List[Any]:
        return list(self._rows[row])

    def append_rows(self, rows: Iterable[Sequence[Any]]) -> None:
        new_rows = [list(row) for row in rows]
        if not new_rows:
            return
        first = len(self._rows)
        self._rows.extend(new_rows)
        self.fire_change(TableChange.inserted(first, len(self._rows) - 1))

    def remove_rows(self, first: int, last: Optional[int] = None) -> None:
        """Remove rows ``first`` to ``last`` (inclusive)."""
        last = first if last is None else last
        if first < 0 or last >= len(self._rows) or first > last:
            raise IndexError(f"Invalid row range {first}..{last}")
        del self._rows[first:last + 1]
        self.fire_change(TableChange.deleted(first, last))

    def set_value(self, row: int, column: int, value: Any) -> None:
        if column < 0 or column >= len(self._names):
            raise MissingColumnError(column)
        values = self._rows[row]
        if column >= len(values):
            values.extend([None] * (column + 1 - len(values)))
        values[column] = value
        self.fire_change(TableChange.updated(row, row, column))

    def reset(self, column_names: Sequence[str], column_types: Optional[Sequence[Any]] = None,
              rows: Optional[Iterable[Sequence[Any]]] = None) -> None:
        """Replace columns and rows at once."""
        self._set_structure(column_names, column_types, rows)
        self.fire_change(TableChange.structure_changed())


class InMemoryTableView(FilterableViewPort):
    """
    View over an InMemoryDataSource, filtered by a predicate.

    The view re-filters itself whenever the data source changes and
    notifies its filtered listeners after each pass.

    Args:
        data_source: Viewed table
        filterable: False builds a view that cannot filter
    """

    def __init__(self, data_source: DataSourcePort, filterable: bool = True):
        super().__init__()
        self.data_source = data_source
        self._filterable = filterable
        self._predicate: Optional[PredicateNode] = None
        self._visible_rows: List[int] = []
        self._selected_rows: List[int] = []
        self.filter_passes = 0
        data_source.add_listener(self._on_table_change)
        self._refilter(notify=False)

    @property
    def supports_filtering(self) -> bool:
        return self._filterable

    @property
    def predicate(self) -> Optional[PredicateNode]:
        return self._predicate

    def set_predicate(self, predicate: Optional[PredicateNode]) -> None:
        if not self._filterable:
            raise ViewError("This view cannot filter")
        self._predicate = predicate
        self._refilter()

    def _on_table_change(self, change: TableChange) -> None:
        self._refilter()

    def _refilter(self, notify: bool = True) -> None:
        predicate = self._predicate
        record = RowRecord(self.data_source)
        self._visible_rows = [
            row for row in range(self.data_source.row_count())
            if predicate is None or predicate.evaluate(record.move_to(row))
        ]
        visible = set(self._visible_rows)
        self._selected_rows = [row for row in self._selected_rows if row in visible]
        if notify:
            self.filter_passes += 1
            self.fire_filtered()

    # Rows ---------------------------------------------------------------------

    @property
    def visible_rows(self) -> List[int]:
        """Model indexes of the visible rows, in model order."""
        return list(self._visible_rows)

    def visible_row_count(self) -> int:
        return len(self._visible_rows)

    def visible_values(self, column: int) -> List[Any]:
        return [self.data_source.value_at(row, column) for row in self._visible_rows]

    # Selection ----------------------------------------------------------------

    @property
    def selected_rows(self) -> List[int]:
        return list(self._selected_rows)

    def select_row(self, view_row: int) -> None:
        self._selected_rows = [self._visible_rows[view_row]]

    def clear_selection(self) -> None:
        self._selected_rows = []

    def select_sole_row(self) -> None:
        if len(self._visible_rows) == 1:
            self._selected_rows = [self._visible_rows[0]]

    def dispose(self) -> None:
        self.data_source.remove_listener(self._on_table_change)
