# -*- coding: utf-8 -*-
"""
Filters Handler Service

Wires a data source and a view together: one editor per column, all of
them members of a single TableFilter driving the view.

The handler listens to the data source:
- appended rows extend the choices of choice editors
- deleted or updated rows invalidate those choices
- a structure change rebuilds every editor, within one suspension so the
  view is re-filtered once

With adaptive choices, choice editors only offer the values of the rows
the other filters leave visible.

Editors and user filters are disposed with the handler.
"""

import logging
from typing import Dict, List, Optional

from ...config.config_manager import ConfigManager
from ..choices.extractor import ColumnValueExtractor
from ..domain.column import ColumnDescriptor
from ..editors.base_editor import EditorKind, FilterEditor
from ..editors.choice_editor import ChoiceFilterEditor
from ..editors.text_editor import TextFilterEditor
from ..filter.expression_parser import ExpressionParser
from ..filter.observable import ObservablePredicate
from ..filter.table_filter import TableFilter
from ..ports.data_source_port import ChangeType, DataSourcePort, TableChange
from ..ports.view_port import FilterableViewPort
from ..types.type_registry import TypeRegistry, create_default_registry

logger = logging.getLogger('TableFilter.Core.FiltersHandler')


class FiltersHandler:
    """
    Owner of the editors and the TableFilter of one table.

    Attributes:
        data_source: Filtered table
        registry: TypeRegistry shared by all editors
        parser: ExpressionParser shared by all editors
        table_filter: Composition root driving the view

    Example:
        >>> handler = FiltersHandler(source, view)
        >>> handler.editor(1).set_text("> 30")
        >>> handler.set_editor_kind(2, EditorKind.CHOICE)
        >>> handler.editor(2).select("Paris")
    """

    def __init__(self, data_source: DataSourcePort,
                 view: Optional[FilterableViewPort] = None,
                 registry: Optional[TypeRegistry] = None,
                 config: Optional[ConfigManager] = None):
        self.config = config if config is not None else ConfigManager()
        self.data_source = data_source
        self.registry = registry if registry is not None else create_default_registry(self.config)
        self.parser = ExpressionParser.from_config(self.config, self.registry)
        self.table_filter = TableFilter.from_config(self.config, view)
        self.default_kind = EditorKind(self.config.get('EDITORS', 'DEFAULT_KIND'))
        self.max_history = int(self.config.get('EDITORS', 'MAX_HISTORY') or 0)
        self.adaptive_choices = bool(self.config.get('CHOICES', 'ADAPTIVE'))

        self._editors: Dict[int, FilterEditor] = {}
        self._kinds: Dict[int, EditorKind] = {}
        self._user_filters: List[ObservablePredicate] = []
        self._disposed = False

        self._build_editors()
        data_source.add_listener(self._on_table_change)

    # =========================================================================
    # Columns and editors
    # =========================================================================

    def column(self, index: int) -> ColumnDescriptor:
        source = self.data_source
        return ColumnDescriptor(index, source.column_type(index), source.column_name(index))

    @property
    def editors(self) -> List[FilterEditor]:
        return [self._editors[index] for index in sorted(self._editors)]

    def editor(self, column_index: int) -> FilterEditor:
        """
        Get the editor of a column.

        Raises:
            KeyError: No such column
        """
        return self._editors[column_index]

    def editor_kind(self, column_index: int) -> EditorKind:
        return self._kinds.get(column_index, self.default_kind)

    def _create_editor(self, column: ColumnDescriptor, kind: EditorKind) -> FilterEditor:
        if kind is EditorKind.TEXT:
            return TextFilterEditor(column, self.parser, max_history=self.max_history)
        if kind is EditorKind.CHOICE:
            extractor = ColumnValueExtractor.from_config(self.config, self.registry)
            return ChoiceFilterEditor(column, self.parser, extractor, self.data_source)
        raise ValueError(f"Editor kind {kind.value!r} cannot be created for a column, "
                         f"use add_filter for custom filters")

    def _install_editor(self, column_index: int) -> FilterEditor:
        editor = self._create_editor(self.column(column_index), self.editor_kind(column_index))
        self._editors[column_index] = editor
        self.table_filter.add_member(editor.filter)
        if isinstance(editor, ChoiceFilterEditor) and self.adaptive_choices:
            editor.set_adaptive(self.table_filter)
        return editor

    def _build_editors(self) -> None:
        for index in range(self.data_source.column_count()):
            self._install_editor(index)
        logger.debug(f"Built {len(self._editors)} editor(s)")

    def _dispose_editors(self) -> None:
        for editor in self._editors.values():
            editor.dispose()
        self._editors.clear()

    def set_editor_kind(self, column_index: int, kind: EditorKind) -> FilterEditor:
        """
        Replace the editor of a column by one of another kind.

        The previous editor is disposed, so its filter stops applying.

        Returns:
            The column's editor
        """
        if column_index not in self._editors:
            raise KeyError(column_index)
        if kind is EditorKind.CUSTOM:
            raise ValueError("Custom filters are added with add_filter")
        self._kinds[column_index] = kind
        current = self._editors[column_index]
        if current.kind is kind:
            return current
        with self.table_filter.suspended():
            current.dispose()
            editor = self._install_editor(column_index)
        return editor

    def set_ignore_case(self, ignore_case: bool) -> None:
        """Switch case sensitivity and recompile every editor."""
        parser = self.parser.with_ignore_case(ignore_case)
        if parser is self.parser:
            return
        self.parser = parser
        with self.table_filter.suspended():
            for editor in self._editors.values():
                editor.set_parser(parser)

    def set_auto_selection(self, enable: bool) -> None:
        self.table_filter.set_auto_selection(enable)

    def set_adaptive_choices(self, enable: bool) -> None:
        """Make every choice editor offer only the values left visible by the other filters."""
        self.adaptive_choices = enable
        source = self.table_filter if enable else None
        for editor in self._choice_editors():
            editor.set_adaptive(source)

    def clear_filters(self) -> None:
        """Empty every editor, filtering the view once."""
        with self.table_filter.suspended():
            for editor in self._editors.values():
                editor.clear()

    # =========================================================================
    # User filters
    # =========================================================================

    @property
    def user_filters(self) -> tuple:
        return tuple(self._user_filters)

    def add_filter(self, observable: ObservablePredicate) -> None:
        """Add a custom filter; it applies immediately."""
        if observable in self._user_filters:
            return
        self._user_filters.append(observable)
        self.table_filter.add_member(observable)
        if observable.current_predicate is not None:
            self.table_filter.filter_updated(observable, observable.current_predicate)

    def remove_filter(self, observable: ObservablePredicate) -> None:
        if observable not in self._user_filters:
            return
        self._user_filters.remove(observable)
        self.table_filter.remove_member(observable)

    # =========================================================================
    # Data source changes
    # =========================================================================

    def _choice_editors(self, column: Optional[int] = None) -> List[ChoiceFilterEditor]:
        return [editor for index, editor in self._editors.items()
                if isinstance(editor, ChoiceFilterEditor) and column in (None, index)]

    def _on_table_change(self, change: TableChange) -> None:
        if change.change_type == ChangeType.STRUCTURE_CHANGED:
            self.rebuild()
        elif change.is_append_only:
            for editor in self._choice_editors():
                editor.extend(change.row_range)
        elif change.change_type == ChangeType.ROWS_UPDATED:
            for editor in self._choice_editors(change.column):
                editor.invalidate_choices()
        elif change.change_type == ChangeType.ROWS_DELETED:
            for editor in self._choice_editors():
                editor.invalidate_choices()

    def rebuild(self) -> None:
        """Recreate every editor after the columns changed."""
        column_count = self.data_source.column_count()
        self._kinds = {index: kind for index, kind in self._kinds.items() if index < column_count}
        with self.table_filter.suspended():
            self._dispose_editors()
            self._build_editors()
        logger.info(f"Editors rebuilt for {column_count} column(s)")

    # =========================================================================
    # Disposal
    # =========================================================================

    def dispose(self) -> None:
        """Stop listening to the data source and release every filter."""
        if self._disposed:
            return
        self._disposed = True
        self.data_source.remove_listener(self._on_table_change)
        with self.table_filter.suspended():
            self._dispose_editors()
            for observable in self._user_filters:
                self.table_filter.remove_member(observable)
            self._user_filters.clear()
        self.table_filter.detach()
