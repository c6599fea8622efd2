"""
View Port Interface.

Abstract interface for the consuming view (a sortable/filterable table)
driven by a TableFilter.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..domain.predicate import PredicateNode

FilteredListener = Callable[['FilterableViewPort'], None]


class FilterableViewPort(ABC):
    """
    A view whose visible rows are decided by a predicate.

    Views that cannot accept a predicate report ``supports_filtering`` as
    False; a TableFilter attached to such a view performs no filtering.

    After every filtering pass (triggered by ``set_predicate`` or by the view
    itself, e.g. on data changes) implementations call
    ``fire_filtered()`` so observers can react to the new row count.
    """

    def __init__(self):
        self._filtered_listeners: List[FilteredListener] = []

    @property
    def supports_filtering(self) -> bool:
        """Capability flag; True unless the view cannot filter."""
        return True

    @abstractmethod
    def set_predicate(self, predicate: Optional[PredicateNode]) -> None:
        """
        Install the predicate deciding row visibility and re-filter.

        Args:
            predicate: Predicate to apply, None to show every row
        """

    @abstractmethod
    def visible_row_count(self) -> int:
        """Number of rows passing the current predicate."""

    @abstractmethod
    def select_sole_row(self) -> None:
        """Select the only visible row (no-op if there is not exactly one)."""

    def add_filtered_listener(self, listener: FilteredListener) -> None:
        if listener not in self._filtered_listeners:
            self._filtered_listeners.append(listener)

    def remove_filtered_listener(self, listener: FilteredListener) -> None:
        if listener in self._filtered_listeners:
            self._filtered_listeners.remove(listener)

    def fire_filtered(self) -> None:
        """Notify listeners that a filtering pass completed."""
        for listener in list(self._filtered_listeners):
            listener(self)
