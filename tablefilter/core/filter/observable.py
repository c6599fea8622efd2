# -*- coding: utf-8 -*-
"""
TableFilter - Observable Predicates

Publish/subscribe primitive shared by editors, user filters and the
composition root: an ObservablePredicate holds the current predicate of its
owner and tells its observers whenever that predicate changes.

Observers are either FilterObserver instances or plain callables taking
``(observable, predicate)``. They are called synchronously, in subscription
order, once per ``publish``; coalescing is left to the TableFilter.
"""

import logging
from typing import Any, List, Optional

from ..domain.predicate import PredicateNode

logger = logging.getLogger('TableFilter.Core.Observable')


class FilterObserver:
    """Receiver of ObservablePredicate notifications."""

    def filter_updated(self, observable: 'ObservablePredicate',
                       predicate: Optional[PredicateNode]) -> None:
        """
        Called after the observable published a new predicate.

        Args:
            observable: Publisher
            predicate: New predicate, None meaning "no filtering"
        """

    def filter_detached(self, observable: 'ObservablePredicate') -> None:
        """Called when the observable is discarded by its owner."""


class ObservablePredicate:
    """
    Predicate holder notifying observers of every change.

    Attributes:
        name: Label used in logs

    Example:
        >>> source = ObservablePredicate(name="age editor")
        >>> source.subscribe(lambda obs, predicate: print(predicate))
        >>> source.publish(None)
        None
    """

    def __init__(self, predicate: Optional[PredicateNode] = None, name: str = ""):
        self._predicate = predicate
        self._observers: List[Any] = []
        self.name = name or self.__class__.__name__

    @property
    def current_predicate(self) -> Optional[PredicateNode]:
        return self._predicate

    @property
    def observers(self) -> tuple:
        return tuple(self._observers)

    def subscribe(self, observer) -> None:
        """Add an observer; subscribing twice has no effect."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer) -> None:
        """Remove an observer; unknown observers are ignored."""
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, predicate: Optional[PredicateNode]) -> None:
        """
        Replace the current predicate and notify every observer.

        Args:
            predicate: New predicate, None meaning "no filtering"
        """
        self._predicate = predicate
        for observer in list(self._observers):
            if isinstance(observer, FilterObserver):
                observer.filter_updated(self, predicate)
            else:
                observer(self, predicate)

    def detach(self) -> None:
        """
        Drop every observer, telling each one the observable is gone.

        Owners call this when they are disposed, so composition roots stop
        accounting for a predicate nobody maintains anymore.
        """
        observers, self._observers = self._observers, []
        for observer in observers:
            if isinstance(observer, FilterObserver):
                observer.filter_detached(self)
        if observers:
            logger.debug(f"{self.name}: detached {len(observers)} observer(s)")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}: {self._predicate}>"
