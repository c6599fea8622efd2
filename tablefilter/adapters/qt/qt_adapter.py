# -*- coding: utf-8 -*-
"""
Qt Adapters

Bridges between the core ports and Qt item models (PyQt5):

- QtModelDataSource: DataSourcePort over any flat QAbstractItemModel,
  translating the model signals into TableChange events
- PredicateProxyModel: QSortFilterProxyModel accepting the source rows a
  predicate includes
- QtFilterView: FilterableViewPort driving a PredicateProxyModel, with an
  optional QItemSelectionModel for auto selection

Only QtCore is used, so the adapters work without a display.
"""

import logging
from typing import Any, Optional, Sequence

from PyQt5.QtCore import (
    QAbstractItemModel,
    QItemSelectionModel,
    QModelIndex,
    QSortFilterProxyModel,
    Qt,
    pyqtSignal,
)

from ...core.domain.exceptions import MissingColumnError
from ...core.domain.predicate import PredicateNode
from ...core.ports.data_source_port import DataSourcePort, TableChange
from ...core.ports.record_port import RowRecord
from ...core.ports.view_port import FilterableViewPort

logger = logging.getLogger('TableFilter.Adapters.Qt')


class QtModelDataSource(DataSourcePort):
    """
    Data source reading a Qt item model.

    Args:
        model: Flat (table or list) item model
        column_types: Semantic type per column; when omitted, a column's type
            is the type of its first non-null value (``str`` if none)
        role: Item data role holding the native values
    """

    def __init__(self, model: QAbstractItemModel,
                 column_types: Optional[Sequence[Any]] = None,
                 role: int = Qt.EditRole):
        super().__init__()
        self.model = model
        self.role = role
        self._column_types = list(column_types) if column_types is not None else None
        self._inferred_types = {}

        model.rowsInserted.connect(self._on_rows_inserted)
        model.rowsRemoved.connect(self._on_rows_removed)
        model.dataChanged.connect(self._on_data_changed)
        model.modelReset.connect(self._on_structure_changed)
        model.layoutChanged.connect(self._on_structure_changed)
        model.columnsInserted.connect(self._on_structure_changed)
        model.columnsRemoved.connect(self._on_structure_changed)

    def column_count(self) -> int:
        return self.model.columnCount()

    def row_count(self) -> int:
        return self.model.rowCount()

    def value_at(self, row: int, column: int) -> Any:
        if column < 0 or column >= self.model.columnCount():
            raise MissingColumnError(column)
        return self.model.index(row, column).data(self.role)

    def column_type(self, column: int) -> Any:
        if self._column_types is not None and column < len(self._column_types):
            return self._column_types[column]
        if column not in self._inferred_types:
            self._inferred_types[column] = self._infer_type(column)
        return self._inferred_types[column]

    def _infer_type(self, column: int) -> Any:
        for row in range(self.model.rowCount()):
            value = self.value_at(row, column)
            if value is not None:
                return type(value)
        return str

    def column_name(self, column: int) -> Optional[str]:
        header = self.model.headerData(column, Qt.Horizontal, Qt.DisplayRole)
        return None if header is None else str(header)

    # Model signals -------------------------------------------------------------

    def _on_rows_inserted(self, parent: QModelIndex, first: int, last: int) -> None:
        if not parent.isValid():
            self.fire_change(TableChange.inserted(first, last))

    def _on_rows_removed(self, parent: QModelIndex, first: int, last: int) -> None:
        if not parent.isValid():
            self.fire_change(TableChange.deleted(first, last))

    def _on_data_changed(self, top_left: QModelIndex, bottom_right: QModelIndex, roles=()) -> None:
        column = top_left.column() if top_left.column() == bottom_right.column() else None
        self.fire_change(TableChange.updated(top_left.row(), bottom_right.row(), column))

    def _on_structure_changed(self, *args) -> None:
        self._inferred_types.clear()
        self.fire_change(TableChange.structure_changed())


class PredicateProxyModel(QSortFilterProxyModel):
    """
    Proxy model hiding the source rows a predicate excludes.

    Signals:
        predicateChanged: Emitted after a new predicate was applied
    """

    predicateChanged = pyqtSignal()

    def __init__(self, data_source: QtModelDataSource, parent=None):
        super().__init__(parent)
        self.data_source = data_source
        self._predicate: Optional[PredicateNode] = None
        self._record = RowRecord(data_source)
        self.setSourceModel(data_source.model)

    @property
    def predicate(self) -> Optional[PredicateNode]:
        return self._predicate

    def set_predicate(self, predicate: Optional[PredicateNode]) -> None:
        self._predicate = predicate
        self.invalidateFilter()
        self.predicateChanged.emit()

    def filterAcceptsRow(self, source_row: int, source_parent: QModelIndex) -> bool:
        predicate = self._predicate
        if predicate is None:
            return True
        return predicate.evaluate(self._record.move_to(source_row))


class QtFilterView(FilterableViewPort):
    """
    View port over a PredicateProxyModel.

    Args:
        proxy: Proxy model to filter
        selection_model: Selection model of the widget showing ``proxy``;
            without it ``select_sole_row`` does nothing
    """

    def __init__(self, proxy: PredicateProxyModel,
                 selection_model: Optional[QItemSelectionModel] = None):
        super().__init__()
        self.proxy = proxy
        self.selection_model = selection_model
        # The proxy re-filters source changes by itself
        proxy.data_source.add_listener(self._on_table_change)

    @classmethod
    def for_model(cls, model: QAbstractItemModel,
                  column_types: Optional[Sequence[Any]] = None) -> 'QtFilterView':
        """Build data source, proxy and view for a model in one go."""
        data_source = QtModelDataSource(model, column_types)
        return cls(PredicateProxyModel(data_source))

    @property
    def data_source(self) -> QtModelDataSource:
        return self.proxy.data_source

    def set_predicate(self, predicate: Optional[PredicateNode]) -> None:
        self.proxy.set_predicate(predicate)
        self.fire_filtered()

    def _on_table_change(self, change: TableChange) -> None:
        self.fire_filtered()

    def visible_row_count(self) -> int:
        return self.proxy.rowCount()

    def select_sole_row(self) -> None:
        if self.proxy.rowCount() != 1:
            return
        if self.selection_model is None:
            logger.debug("No selection model, auto selection skipped")
            return
        self.selection_model.select(
            self.proxy.index(0, 0),
            QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows,
        )

    def dispose(self) -> None:
        self.proxy.data_source.remove_listener(self._on_table_change)
