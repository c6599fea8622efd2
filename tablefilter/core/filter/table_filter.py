# -*- coding: utf-8 -*-
"""
TableFilter - Composition Root

A TableFilter ANDs the predicates of all its member observables (one per
column editor, plus any user filter) and installs the combined predicate on
the attached view whenever a member changes.

Notifications can be suspended to batch many member changes into a single
re-filtering of the view: suspension is counted, and a change raised while
suspended is delivered exactly once when the count returns to zero.

A view whose ``supports_filtering`` capability is False is accepted but
never filtered: the TableFilter then performs no filtering at all.

The TableFilter is itself an ObservablePredicate: after every delivery it
publishes the combined predicate to its own observers.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, Optional

from ..domain.predicate import PredicateNode, all_of
from ..ports.view_port import FilterableViewPort
from .observable import FilterObserver, ObservablePredicate

logger = logging.getLogger('TableFilter.Core.TableFilter')


class NotificationState(Enum):
    """Delivery state of a TableFilter."""
    ACTIVE = "active"
    SUSPENDED = "suspended"
    SUSPENDED_DIRTY = "suspended_dirty"


class TableFilter(ObservablePredicate, FilterObserver):
    """
    AND composition of observable predicates driving a view.

    Attributes:
        auto_selection: Select the only visible row after each filtering pass

    Example:
        >>> table_filter = TableFilter(view)
        >>> table_filter.add_member(age_editor.filter)
        >>> with table_filter.suspended():
        ...     age_editor.set_text("> 20")
        ...     name_editor.set_text("A*")
        # the view is filtered once, on exit
    """

    def __init__(self, view: Optional[FilterableViewPort] = None,
                 auto_selection: bool = False, name: str = "TableFilter"):
        super().__init__(None, name)
        self._members: Dict[ObservablePredicate, Optional[PredicateNode]] = {}
        self._suspend_depth = 0
        self._pending = False
        self._view: Optional[FilterableViewPort] = None
        self._auto_selection = auto_selection
        if view is not None:
            self.attach_view(view)

    @classmethod
    def from_config(cls, config, view: Optional[FilterableViewPort] = None) -> 'TableFilter':
        """Build a TableFilter honoring the FILTER section of a ConfigManager."""
        return cls(view, auto_selection=bool(config.get('FILTER', 'AUTO_SELECTION')))

    # =========================================================================
    # Members
    # =========================================================================

    @property
    def members(self) -> tuple:
        return tuple(self._members)

    def __contains__(self, observable) -> bool:
        return observable in self._members

    def __len__(self) -> int:
        return len(self._members)

    def add_member(self, observable: ObservablePredicate) -> None:
        """
        Start composing an observable predicate.

        The member's current predicate is taken into account from now on,
        but no notification is sent: the member's next publish will.

        Args:
            observable: Predicate source to add (no-op if already a member)
        """
        if observable is self or observable in self._members:
            return
        self._members[observable] = observable.current_predicate
        observable.subscribe(self)
        logger.debug(f"{self.name}: added member {observable.name}")

    def remove_member(self, observable: ObservablePredicate) -> None:
        """
        Stop composing an observable predicate.

        Re-filters the view if the member was filtering.
        """
        if observable not in self._members:
            return
        observable.unsubscribe(self)
        last_predicate = self._members.pop(observable)
        logger.debug(f"{self.name}: removed member {observable.name}")
        if last_predicate is not None:
            self._members_changed()

    def member_predicate(self, observable: ObservablePredicate) -> Optional[PredicateNode]:
        """Last predicate reported by a member."""
        return self._members.get(observable)

    @property
    def combined_predicate(self) -> Optional[PredicateNode]:
        """AND of the non-null member predicates, None if nothing filters."""
        return all_of(self._members.values())

    def combined_predicate_without(self, observable) -> Optional[PredicateNode]:
        """AND of the member predicates except the one of ``observable``."""
        return all_of(predicate for member, predicate in self._members.items()
                      if member is not observable)

    # FilterObserver -----------------------------------------------------------

    def filter_updated(self, observable: ObservablePredicate,
                       predicate: Optional[PredicateNode]) -> None:
        if observable not in self._members:
            return
        self._members[observable] = predicate
        self._members_changed()

    def filter_detached(self, observable: ObservablePredicate) -> None:
        self.remove_member(observable)

    # =========================================================================
    # Notifications
    # =========================================================================

    @property
    def state(self) -> NotificationState:
        if self._suspend_depth <= 0:
            return NotificationState.ACTIVE
        if self._pending:
            return NotificationState.SUSPENDED_DIRTY
        return NotificationState.SUSPENDED

    @property
    def suspend_depth(self) -> int:
        return self._suspend_depth

    @property
    def has_pending_notification(self) -> bool:
        return self._pending

    def suspend(self) -> None:
        """Hold notifications until a matching ``resume``."""
        self._suspend_depth += 1
        logger.debug(f"{self.name}: suspended (depth {self._suspend_depth})")

    def resume(self) -> None:
        """
        Release one ``suspend``.

        When the count reaches zero, a change raised meanwhile is delivered
        once.
        """
        self._suspend_depth -= 1
        logger.debug(f"{self.name}: resumed (depth {self._suspend_depth})")
        if self._suspend_depth <= 0 and self._pending:
            self._deliver()

    @contextmanager
    def suspended(self) -> Iterator['TableFilter']:
        """Context manager bracketing ``suspend``/``resume``."""
        self.suspend()
        try:
            yield self
        finally:
            self.resume()

    def force_deliver_pending(self) -> None:
        """Deliver a pending change now, even while suspended."""
        if self._pending:
            self._deliver()

    def _members_changed(self) -> None:
        if self._suspend_depth > 0:
            self._pending = True
            return
        self._deliver()

    def _deliver(self) -> None:
        combined = self.combined_predicate
        self._pending = not self._install(combined)
        self.publish(combined)

    def _install(self, predicate: Optional[PredicateNode]) -> bool:
        view = self._view
        if view is None or not view.supports_filtering:
            return False
        view.set_predicate(predicate)
        return True

    # =========================================================================
    # View
    # =========================================================================

    @property
    def view(self) -> Optional[FilterableViewPort]:
        return self._view

    @property
    def is_filtering(self) -> bool:
        """True if a filter-capable view is attached."""
        return self._view is not None and self._view.supports_filtering

    def attach_view(self, view: Optional[FilterableViewPort]) -> None:
        """
        Drive another view (None to drive none).

        The previous view gets its predicate removed. A view without the
        filtering capability is kept but never filtered.
        """
        old_view = self._view
        if old_view is view:
            return
        if old_view is not None:
            old_view.remove_filtered_listener(self._on_view_filtered)
            if old_view.supports_filtering:
                old_view.set_predicate(None)

        self._view = view
        if view is None:
            return
        if not view.supports_filtering:
            logger.info(f"{self.name}: view {view!r} cannot filter, filtering disabled")
            return
        if self._auto_selection:
            view.add_filtered_listener(self._on_view_filtered)
        if self._suspend_depth <= 0:
            view.set_predicate(self.combined_predicate)
            self._pending = False
        else:
            self._pending = True

    # =========================================================================
    # Auto selection
    # =========================================================================

    @property
    def auto_selection(self) -> bool:
        return self._auto_selection

    def set_auto_selection(self, enable: bool) -> None:
        """Enable or disable selecting the sole visible row after filtering."""
        if enable == self._auto_selection:
            return
        self._auto_selection = enable
        if self.is_filtering:
            if enable:
                self._view.add_filtered_listener(self._on_view_filtered)
            else:
                self._view.remove_filtered_listener(self._on_view_filtered)

    def _on_view_filtered(self, view: FilterableViewPort) -> None:
        if view is self._view and view.visible_row_count() == 1:
            view.select_sole_row()

    # =========================================================================
    # Disposal
    # =========================================================================

    def detach(self) -> None:
        """Release every member and the view, then drop own observers."""
        for observable in list(self._members):
            observable.unsubscribe(self)
        self._members.clear()
        self.attach_view(None)
        super().detach()
