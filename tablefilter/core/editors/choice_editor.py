# -*- coding: utf-8 -*-
"""
Choice Filter Editor

Editor offering the distinct values of its column, as extracted by a
ColumnValueExtractor. Selecting a value filters the rows holding exactly
that value; the EMPTY and OTHER custom choices select the null/blank rows
and the rows outside the offered values.

In adaptive mode the choices only cover the rows the other filters of a
TableFilter let through, and follow every change of those filters.
"""

import logging
from typing import Any, Optional

from ..choices.extractor import ChoiceSet, ColumnValueExtractor, CustomChoice, is_blank
from ..domain.column import ColumnDescriptor
from ..domain.exceptions import ParseError
from ..domain.predicate import Leaf, PredicateNode
from ..filter.expression_parser import ExpressionParser, format_value
from ..filter.table_filter import TableFilter
from ..ports.data_source_port import DataSourcePort
from ..ports.record_port import RowRecord
from .base_editor import EditorKind, FilterEditor

logger = logging.getLogger('TableFilter.Core.Editors.Choice')


class ChoiceFilterEditor(FilterEditor):
    """
    Editor selecting one choice among the column values.

    Choices are extracted lazily on first access. When the choice set is
    rebuilt and the selected value is gone, the value is inserted back so
    the selection stays visible.

    Example:
        >>> editor = ChoiceFilterEditor(column, parser, ColumnValueExtractor(registry), source)
        >>> editor.choices()
        [<CustomChoice.EMPTY: '(empty)'>, 'Alice', 'Bob']
        >>> editor.select('Bob')
    """

    kind = EditorKind.CHOICE

    def __init__(self, column: ColumnDescriptor, parser: ExpressionParser,
                 extractor: ColumnValueExtractor, data_source: DataSourcePort):
        super().__init__(column, parser)
        self.extractor = extractor
        self.data_source = data_source
        self._selected: Any = None
        self._known_set: Optional[ChoiceSet] = None
        self._adaptive_source: Optional[TableFilter] = None
        self._context: Optional[PredicateNode] = None
        self._record = RowRecord(data_source)

    # =========================================================================
    # Choices
    # =========================================================================

    @property
    def choice_set(self) -> ChoiceSet:
        """Current choices, extracted or re-extracted as needed."""
        choice_set = self.extractor.choice_set
        if choice_set is None:
            choice_set = self.extractor.extract_all(self.data_source, self.column.index)
        if choice_set is not self._known_set:
            self._known_set = choice_set
            self._preserve_selection(choice_set)
        return choice_set

    def choices(self) -> list:
        """Entries to offer: EMPTY first, then the values, OTHER last."""
        return self.choice_set.choices()

    def _preserve_selection(self, choice_set: ChoiceSet) -> None:
        selected = self._selected
        if selected is None or isinstance(selected, CustomChoice):
            return
        if selected not in choice_set:
            choice_set.insert(selected)
            logger.debug(f"Kept vanished selection {selected!r} in {self.column}")

    def extend(self, rows) -> None:
        """Take appended rows into account."""
        if self.extractor.is_valid:
            self.extractor.extend(self.data_source, self.column.index, rows)
            self.choices_changed()

    def invalidate_choices(self) -> None:
        """Force a re-extraction of the choices."""
        self.extractor.invalidate()
        self.choices_changed()

    def choices_changed(self) -> None:
        """Rebuild the OTHER predicate, which depends on the offered values."""
        if self._selected is CustomChoice.OTHER:
            self.refresh()

    # =========================================================================
    # Adaptive choices
    # =========================================================================

    @property
    def is_adaptive(self) -> bool:
        return self._adaptive_source is not None

    def set_adaptive(self, table_filter: Optional[TableFilter]) -> None:
        """
        Restrict the choices to the rows the other filters accept.

        The editor's own predicate is left out, so selecting a value never
        hides the other values of the column.

        Args:
            table_filter: TableFilter whose members narrow the rows, None to
                offer the values of every row again
        """
        previous = self._adaptive_source
        if table_filter is previous:
            return
        if previous is not None:
            previous.unsubscribe(self._on_table_filtered)
        self._adaptive_source = table_filter
        if table_filter is None:
            self._context = None
            self.extractor.row_filter = None
        else:
            self._context = table_filter.combined_predicate_without(self.filter)
            self.extractor.row_filter = self._accepts
            table_filter.subscribe(self._on_table_filtered)
        self.invalidate_choices()

    def _accepts(self, row: int) -> bool:
        context = self._context
        return context is None or context.evaluate(self._record.move_to(row))

    def _on_table_filtered(self, table_filter: TableFilter, predicate) -> None:
        context = table_filter.combined_predicate_without(self.filter)
        if context == self._context:
            return
        self._context = context
        logger.debug(f"Other filters changed, choices of {self.column} invalidated")
        self.invalidate_choices()

    # =========================================================================
    # Selection
    # =========================================================================

    @property
    def selected(self) -> Any:
        """Selected value or CustomChoice, None when not filtering."""
        return self._selected

    def select(self, choice: Any) -> None:
        """
        Select a choice and publish its predicate.

        Args:
            choice: Column value, CustomChoice.EMPTY, CustomChoice.OTHER,
                or None to stop filtering
        """
        self._selected = choice
        self._publish(self.build_predicate(choice))

    def clear(self) -> None:
        self.select(None)

    def refresh(self) -> None:
        self.select(self._selected)

    def build_predicate(self, choice: Any) -> Optional[PredicateNode]:
        if choice is None:
            return None
        if choice is CustomChoice.EMPTY:
            return self._empty_predicate()
        if choice is CustomChoice.OTHER:
            return self._other_predicate()
        return self._value_predicate(choice)

    def _empty_predicate(self) -> PredicateNode:
        index = self.column.index

        def include(record) -> bool:
            return is_blank(record.value_at(index))

        return Leaf(include, f"{self.column.label} {CustomChoice.EMPTY}")

    def _other_predicate(self) -> PredicateNode:
        index = self.column.index
        offered = frozenset(self.choice_set.values)

        def include(record) -> bool:
            value = record.value_at(index)
            return not is_blank(value) and value not in offered

        return Leaf(include, f"{self.column.label} {CustomChoice.OTHER}")

    def _value_predicate(self, value: Any) -> PredicateNode:
        parser = self._parser
        registry = parser.registry
        codec = registry.get_codec(self.column.semantic_type) or registry.get_string_codec()
        text = format_value(codec, value)
        expression = parser.escape(text, self.column)
        try:
            return parser.parse(expression, self.column)
        except ParseError as e:
            logger.debug(f"Choice {text!r} not expressible ({e.message}), matching the value")
            index = self.column.index
            return Leaf(lambda record: record.value_at(index) == value,
                        f"{self.column.label} = {text}")

    def dispose(self) -> None:
        if self._adaptive_source is not None:
            self._adaptive_source.unsubscribe(self._on_table_filtered)
            self._adaptive_source = None
        super().dispose()
        self.extractor.detach()
