"""
Predicate Nodes.

Immutable boolean expression trees deciding whether a record is included
by a filter:

- Leaf: wraps a compiled ``record -> bool`` function
- And / Or: short-circuit left to right
- Not: negates its child

A tree is built once and never mutated; owners replace a whole tree by
swapping their reference to it. Evaluation never raises for a record that
lacks the referenced column: the fault is reported by the record accessor
as MissingColumnError and converted to "does not match".

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .exceptions import MissingColumnError


class PredicateNode:
    """Base class for all predicate tree nodes."""

    def evaluate(self, record) -> bool:
        raise NotImplementedError

    def __call__(self, record) -> bool:
        return self.evaluate(record)

    def __and__(self, other: 'PredicateNode') -> 'PredicateNode':
        return And(self, other)

    def __or__(self, other: 'PredicateNode') -> 'PredicateNode':
        return Or(self, other)

    def __invert__(self) -> 'PredicateNode':
        return Not(self)

    def size(self) -> int:
        """Number of nodes in the tree."""
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Leaf(PredicateNode):
    """
    Terminal node wrapping a compiled predicate function.

    Leaves compare and hash by identity: two compiled functions are never
    known to be equivalent.

    Attributes:
        fn: Callable receiving a record accessor and returning a boolean
        description: Text shown in repr/logs (usually the source expression)
    """
    fn: Callable
    description: str = ""

    def evaluate(self, record) -> bool:
        try:
            return bool(self.fn(record))
        except MissingColumnError:
            return False

    def size(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.description or "<leaf>"


@dataclass(frozen=True)
class And(PredicateNode):
    left: PredicateNode
    right: PredicateNode

    def evaluate(self, record) -> bool:
        return self.left.evaluate(record) and self.right.evaluate(record)

    def size(self) -> int:
        return 1 + self.left.size() + self.right.size()

    def __str__(self) -> str:
        return f"({self.left} AND {self.right})"


@dataclass(frozen=True)
class Or(PredicateNode):
    left: PredicateNode
    right: PredicateNode

    def evaluate(self, record) -> bool:
        return self.left.evaluate(record) or self.right.evaluate(record)

    def size(self) -> int:
        return 1 + self.left.size() + self.right.size()

    def __str__(self) -> str:
        return f"({self.left} OR {self.right})"


@dataclass(frozen=True)
class Not(PredicateNode):
    inner: PredicateNode

    def evaluate(self, record) -> bool:
        return not self.inner.evaluate(record)

    def size(self) -> int:
        return 1 + self.inner.size()

    def __str__(self) -> str:
        return f"NOT {self.inner}"


MATCH_ALL = Leaf(lambda record: True, "TRUE")
MATCH_NONE = Leaf(lambda record: False, "FALSE")


def _fold(predicates: Iterable[Optional[PredicateNode]], node_class) -> Optional[PredicateNode]:
    result = None
    for predicate in predicates:
        if predicate is None:
            continue
        result = predicate if result is None else node_class(result, predicate)
    return result


def all_of(predicates: Iterable[Optional[PredicateNode]]) -> Optional[PredicateNode]:
    """
    Combine predicates with AND, skipping ``None`` entries.

    Args:
        predicates: Predicates in evaluation order; None means "no filtering"

    Returns:
        Left-deep And tree, the single predicate, or None if nothing filters
    """
    return _fold(predicates, And)


def any_of(predicates: Iterable[Optional[PredicateNode]]) -> Optional[PredicateNode]:
    """Combine predicates with OR, skipping ``None`` entries."""
    return _fold(predicates, Or)
