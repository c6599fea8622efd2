# -*- coding: utf-8 -*-
"""
Composed Observable Predicates

Observables combining the predicates of child observables:

- AndFilter: every active child must match
- OrFilter: at least one active child must match
- NotFilter: negation of the AND of the active children

A child publishing None does not take part in the combination; when no
child is active the composed filter publishes None too (no filtering).
Composed filters republish whenever a child changes, so they can be nested
or added to a TableFilter like any editor.
"""

import logging
from typing import List, Optional

from ..domain.predicate import Not, PredicateNode, all_of, any_of
from .observable import FilterObserver, ObservablePredicate

logger = logging.getLogger('TableFilter.Core.ComposedFilter')


class ComposedFilter(ObservablePredicate, FilterObserver):
    """
    Base class of the composed filters.

    Args:
        *filters: Initial children
        name: Label used in logs
    """

    def __init__(self, *filters: ObservablePredicate, name: str = ""):
        super().__init__(None, name)
        self._filters: List[ObservablePredicate] = []
        for child in filters:
            self._attach(child)
        self._predicate = self.combine()

    @property
    def filters(self) -> tuple:
        return tuple(self._filters)

    def _attach(self, child: ObservablePredicate) -> bool:
        if child is self or child in self._filters:
            return False
        self._filters.append(child)
        child.subscribe(self)
        return True

    def add_filter(self, child: ObservablePredicate) -> None:
        """Add a child and republish."""
        if self._attach(child):
            self.refresh()

    def remove_filter(self, child: ObservablePredicate) -> None:
        """Remove a child and republish; unknown children are ignored."""
        if child not in self._filters:
            return
        child.unsubscribe(self)
        self._filters.remove(child)
        self.refresh()

    def active_predicates(self) -> List[PredicateNode]:
        predicates = (child.current_predicate for child in self._filters)
        return [predicate for predicate in predicates if predicate is not None]

    def combine(self) -> Optional[PredicateNode]:
        raise NotImplementedError

    def refresh(self) -> None:
        """Recombine the children and publish the result."""
        self.publish(self.combine())

    # FilterObserver -----------------------------------------------------------

    def filter_updated(self, observable: ObservablePredicate,
                       predicate: Optional[PredicateNode]) -> None:
        self.refresh()

    def filter_detached(self, observable: ObservablePredicate) -> None:
        self.remove_filter(observable)

    def detach(self) -> None:
        for child in self._filters:
            child.unsubscribe(self)
        self._filters.clear()
        super().detach()


class AndFilter(ComposedFilter):
    def combine(self) -> Optional[PredicateNode]:
        return all_of(self.active_predicates())


class OrFilter(ComposedFilter):
    def combine(self) -> Optional[PredicateNode]:
        return any_of(self.active_predicates())


class NotFilter(ComposedFilter):
    """Negates the AND of its children."""

    def combine(self) -> Optional[PredicateNode]:
        combined = all_of(self.active_predicates())
        if combined is None:
            return None
        return Not(combined)
