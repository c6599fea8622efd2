# -*- coding: utf-8 -*-
"""
Column Value Extractor

Builds the ChoiceSet offered by a choice editor: the distinct values of a
column, sorted, optionally limited to the most frequent ones.

- Full extraction scans every row once and counts occurrences
- With a frequency cap ``k`` below the distinct count, only the ``k`` most
  frequent values are kept (ties by first occurrence), plus the OTHER
  bucket when configured
- Appended rows extend the set in place: unseen values are inserted at
  their sorted position, without re-ranking by frequency
- Any other change invalidates the set; it is re-extracted on next access
- An optional row filter restricts every scan to the rows it accepts

Null and blank values are not choices: they are represented by the EMPTY
custom choice, listed first when present.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..domain.exceptions import ParseError
from ..filter.expression_parser import format_value
from ..ports.data_source_port import DataSourcePort
from ..types.type_registry import TypeRegistry, natural_ordering

logger = logging.getLogger('TableFilter.Core.Choices')

Comparator = Callable[[Any, Any], int]


class CustomChoice(Enum):
    """Choices standing for a group of values rather than one value."""
    EMPTY = "(empty)"
    OTHER = "(other)"

    def __str__(self) -> str:
        return self.value


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


class ChoiceSet:
    """
    Ordered, deduplicated set of the values of a column.

    Iterating yields the explicit values in order, then ``CustomChoice.OTHER``
    when the set has an other bucket; ``len`` counts the same entries. The
    EMPTY choice is reported separately by ``has_empty`` and listed by
    ``choices()``.

    Attributes:
        frequency_cap: Maximum number of explicit values, 0 for no limit
        has_other: True if values were left out and the OTHER bucket is offered
        has_empty: True if the column holds null or blank values
    """

    def __init__(self, compare: Comparator, frequency_cap: int = 0):
        self._compare = compare
        self._values: List[Any] = []
        self._members = set()
        # Occurrences of every value seen, in first-seen order
        self._counts: Dict[Any, int] = {}
        self.frequency_cap = frequency_cap
        self.has_other = False
        self.has_empty = False

    @property
    def values(self) -> tuple:
        """Explicit values, sorted."""
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values) + (1 if self.has_other else 0)

    def __iter__(self):
        yield from self._values
        if self.has_other:
            yield CustomChoice.OTHER

    def __contains__(self, value: Any) -> bool:
        if isinstance(value, CustomChoice):
            return self.has_other if value is CustomChoice.OTHER else self.has_empty
        return value in self._members

    def choices(self) -> list:
        """Entries as offered to the user: EMPTY first, OTHER last."""
        entries = [CustomChoice.EMPTY] if self.has_empty else []
        entries.extend(self)
        return entries

    def count(self, value: Any) -> int:
        """Occurrences of a value seen so far."""
        return self._counts.get(value, 0)

    def index(self, value: Any) -> int:
        """Position of an explicit value, ValueError if absent."""
        return self._values.index(value)

    def insertion_point(self, value: Any) -> int:
        """Binary search of the sorted position of a value."""
        low, high = 0, len(self._values)
        while low < high:
            middle = (low + high) // 2
            if self._compare(self._values[middle], value) < 0:
                low = middle + 1
            else:
                high = middle
        return low

    def insert(self, value: Any) -> int:
        """
        Insert an explicit value at its sorted position.

        Returns:
            int: Position of the value (existing position if already present)
        """
        if value in self._members:
            return self._values.index(value)
        position = self.insertion_point(value)
        self._values.insert(position, value)
        self._members.add(value)
        return position

    def _record(self, value: Any) -> bool:
        """Count one occurrence; True on the first one."""
        seen = value in self._counts
        self._counts[value] = self._counts.get(value, 0) + 1
        return not seen

    def _rank(self, other_bucket: bool) -> None:
        """Rebuild the explicit values from the counts, honoring the cap."""
        distinct = list(self._counts)
        cap = self.frequency_cap
        if cap and len(distinct) > cap:
            # sorted() is stable: ties keep their first-seen order
            kept = sorted(distinct, key=lambda v: -self._counts[v])[:cap]
            self.has_other = other_bucket
        else:
            kept = distinct
            self.has_other = False
        self._values = []
        self._members = set()
        for value in kept:
            self.insert(value)

    def __repr__(self) -> str:
        return f"<ChoiceSet {len(self._values)} values other={self.has_other} empty={self.has_empty}>"


class ColumnValueExtractor:
    """
    Extracts and maintains the ChoiceSet of one column.

    The extractor remembers the data source and column of its last full
    extraction, so an invalidated set is rebuilt transparently on the next
    ``choice_set`` access. ``detach`` forgets them.

    Example:
        >>> extractor = ColumnValueExtractor(TypeRegistry.default(), max_choices=20)
        >>> choice_set = extractor.extract_all(source, 2)
        >>> source.append_rows(new_rows)
        >>> extractor.extend(source, 2, range(first_new, source.row_count()))
    """

    def __init__(self, registry: Optional[TypeRegistry] = None, max_choices: int = 0,
                 other_bucket: bool = True, include_empty: bool = True):
        self.registry = registry if registry is not None else TypeRegistry.default()
        self.max_choices = max_choices
        self.other_bucket = other_bucket
        self.include_empty = include_empty
        # Called with a row index, False skips the row
        self.row_filter: Optional[Callable[[int], bool]] = None
        self._source: Optional[DataSourcePort] = None
        self._column: Optional[int] = None
        self._choice_set: Optional[ChoiceSet] = None

    @classmethod
    def from_config(cls, config, registry: Optional[TypeRegistry] = None) -> 'ColumnValueExtractor':
        """Build an extractor honoring the CHOICES section of a ConfigManager."""
        return cls(
            registry,
            max_choices=int(config.get('CHOICES', 'MAX_CHOICES') or 0),
            other_bucket=bool(config.get('CHOICES', 'OTHER_BUCKET')),
            include_empty=bool(config.get('CHOICES', 'INCLUDE_EMPTY')),
        )

    # =========================================================================
    # Ordering
    # =========================================================================

    def comparator(self, semantic_type: Any) -> Comparator:
        """
        Comparison used to sort the values of a column type.

        The type's ordering when it is orderable, else the order of the
        formatted values.
        """
        registry = self.registry
        codec = registry.get_codec(semantic_type) or registry.get_string_codec()

        def by_text(a: Any, b: Any) -> int:
            return natural_ordering(format_value(codec, a), format_value(codec, b))

        if semantic_type is str or not registry.is_orderable(semantic_type):
            return by_text
        ordering = registry.get_ordering(semantic_type)

        def by_value(a: Any, b: Any) -> int:
            try:
                return ordering(a, b)
            except (TypeError, ValueError, ParseError):
                return by_text(a, b)

        return by_value

    # =========================================================================
    # Extraction
    # =========================================================================

    @property
    def choice_set(self) -> Optional[ChoiceSet]:
        """
        Current set, re-extracted if invalidated.

        None if nothing was ever extracted (or after ``detach``).
        """
        if self._choice_set is None and self._source is not None:
            self.extract_all(self._source, self._column)
        return self._choice_set

    @property
    def is_valid(self) -> bool:
        return self._choice_set is not None

    @property
    def data_source(self) -> Optional[DataSourcePort]:
        return self._source

    @property
    def column(self) -> Optional[int]:
        return self._column

    def extract_all(self, data_source: DataSourcePort, column_index: int) -> ChoiceSet:
        """
        Scan every row of a column, or the rows accepted by ``row_filter``.

        Args:
            data_source: Table to scan
            column_index: Model column

        Returns:
            ChoiceSet: New set, also kept as the current one
        """
        choice_set = ChoiceSet(self.comparator(data_source.column_type(column_index)),
                               self.max_choices)
        for row in self._accepted(range(data_source.row_count())):
            self._add_occurrence(choice_set, data_source.value_at(row, column_index))
        choice_set._rank(self.other_bucket)

        self._source = data_source
        self._column = column_index
        self._choice_set = choice_set
        logger.debug(f"Extracted {len(choice_set)} choice(s) from column {column_index}")
        return choice_set

    def extend(self, data_source: DataSourcePort, column_index: int,
               rows: Iterable[int]) -> ChoiceSet:
        """
        Add the values of appended rows to the current set.

        Unseen values are inserted at their sorted position while the cap
        allows; beyond it they are covered by the OTHER bucket. Falls back
        to a full extraction when there is no valid set for this column.

        Args:
            data_source: Table the rows were appended to
            column_index: Model column
            rows: Indexes of the new rows

        Returns:
            ChoiceSet: The updated set
        """
        choice_set = self._choice_set
        if (choice_set is None or data_source is not self._source
                or column_index != self._column):
            return self.extract_all(data_source, column_index)

        cap = choice_set.frequency_cap
        for row in self._accepted(rows):
            value = data_source.value_at(row, column_index)
            if not self._add_occurrence(choice_set, value):
                continue
            if not cap or len(choice_set.values) < cap:
                choice_set.insert(value)
            elif self.other_bucket:
                choice_set.has_other = True
        return choice_set

    def _accepted(self, rows: Iterable[int]) -> Iterable[int]:
        if self.row_filter is None:
            return rows
        return filter(self.row_filter, rows)

    def _add_occurrence(self, choice_set: ChoiceSet, value: Any) -> bool:
        if is_blank(value):
            if self.include_empty:
                choice_set.has_empty = True
            return False
        return choice_set._record(value)

    def apply_frequency_cap(self, k: int) -> Optional[ChoiceSet]:
        """
        Change the cap and re-rank the current set from its counts.

        Args:
            k: Maximum number of explicit values, 0 for no limit

        Returns:
            The re-ranked set, None if nothing was extracted yet
        """
        if k < 0:
            raise ValueError(f"Frequency cap must be positive, got {k}")
        self.max_choices = k
        choice_set = self._choice_set
        if choice_set is not None:
            choice_set.frequency_cap = k
            choice_set._rank(self.other_bucket)
        return choice_set

    def invalidate(self) -> None:
        """Drop the current set; the next access re-extracts it."""
        if self._choice_set is not None:
            logger.debug(f"Choices of column {self._column} invalidated")
        self._choice_set = None

    def detach(self) -> None:
        """Stop tracking the data source."""
        self._choice_set = None
        self._source = None
        self._column = None


def extract_all(data_source: DataSourcePort, column_index: int,
                registry: Optional[TypeRegistry] = None, max_choices: int = 0) -> ChoiceSet:
    """One-shot extraction with a throwaway extractor."""
    return ColumnValueExtractor(registry, max_choices).extract_all(data_source, column_index)
