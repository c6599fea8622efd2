# -*- coding: utf-8 -*-
"""
User Filter

Observable predicate controlled directly by application code, for filters
that no column editor expresses (e.g. "only rows flagged as favorites").
"""

import logging
from typing import Callable, Optional, Union

from ..domain.predicate import Leaf, PredicateNode
from .observable import ObservablePredicate

logger = logging.getLogger('TableFilter.Core.UserFilter')

PredicateLike = Union[PredicateNode, Callable, None]


def as_predicate(predicate: PredicateLike, description: str = "") -> Optional[PredicateNode]:
    """Wrap a plain ``record -> bool`` callable into a Leaf."""
    if predicate is None or isinstance(predicate, PredicateNode):
        return predicate
    if not callable(predicate):
        raise TypeError(f"Expected a predicate or a callable, got {type(predicate).__name__}")
    return Leaf(predicate, description)


class UserFilter(ObservablePredicate):
    """
    Application-defined filter that can be switched on and off.

    While disabled the filter publishes None; the wrapped predicate is kept
    and published again when the filter is re-enabled.

    Example:
        >>> favorites = UserFilter(lambda record: record.value_at(3), name="favorites")
        >>> table_filter.add_member(favorites)
        >>> favorites.set_enabled(False)
    """

    def __init__(self, predicate: PredicateLike = None, name: str = "", enabled: bool = True):
        self._user_predicate = as_predicate(predicate, name)
        self._enabled = enabled
        super().__init__(self._user_predicate if enabled else None, name)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def user_predicate(self) -> Optional[PredicateNode]:
        return self._user_predicate

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        logger.debug(f"{self.name}: {'enabled' if enabled else 'disabled'}")
        self.publish(self._user_predicate if enabled else None)

    def set_predicate(self, predicate: PredicateLike) -> None:
        """
        Replace the wrapped predicate.

        Publishes only while enabled.
        """
        self._user_predicate = as_predicate(predicate, self.name)
        if self._enabled:
            self.publish(self._user_predicate)
