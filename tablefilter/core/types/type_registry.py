# -*- coding: utf-8 -*-
"""
TableFilter - Type Registry

Maps a semantic type to its Codec and optional Ordering function.

The registry is an explicit value handed to the ExpressionParser; there is
no shared global instance. ``TypeRegistry.default()`` assembles the usual
codecs and orderings for the primitive and temporal types.

Temporal types get a derived ordering whenever their codec is replaced,
unless an ordering was set explicitly: the derived ordering compares the
values as the codec sees them (``parse(format(v))``), so a date format that
drops the time of day keeps comparisons consistent with what the user types.
"""
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .codecs import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_TIME_FORMAT,
    BooleanCodec,
    Codec,
    DateCodec,
    DateTimeCodec,
    DecimalCodec,
    FloatCodec,
    IntegerCodec,
    StringCodec,
    TimeCodec,
)

logger = logging.getLogger('TableFilter.Core.Types')

Ordering = Callable[[Any, Any], int]

TEMPORAL_TYPES = (date, datetime, time)


def natural_ordering(a: Any, b: Any) -> int:
    """Three-way comparison using the values' own ``<`` and ``>``."""
    return (a > b) - (a < b)


class DerivedOrdering:
    """
    Ordering comparing values after a codec round trip.

    Attributes:
        codec: Codec whose textual precision defines equality
    """

    def __init__(self, codec: Codec):
        self.codec = codec

    def key(self, value: Any) -> Any:
        return self.codec.parse(self.codec.format(value))

    def __call__(self, a: Any, b: Any) -> int:
        return natural_ordering(self.key(a), self.key(b))

    def __repr__(self) -> str:
        return f"DerivedOrdering({self.codec!r})"


def is_temporal(semantic_type: Any) -> bool:
    """Check if a type holds dates or times."""
    return isinstance(semantic_type, type) and issubclass(semantic_type, TEMPORAL_TYPES)


class TypeRegistry:
    """
    Codec and ordering lookup per semantic type.

    Lookups follow the type's MRO, so subclasses inherit the entries of their
    closest registered base. The ``str`` codec always exists.

    Examples:
        >>> registry = TypeRegistry.default()
        >>> registry.get_codec(int).parse("42")
        42
        >>> registry.set_codec(date, DateCodec("%d/%m/%Y"))
        >>> registry.get_ordering(date)
        DerivedOrdering(DateCodec('%d/%m/%Y'))
    """

    def __init__(self):
        self._codecs: Dict[Any, Codec] = {str: StringCodec()}
        self._orderings: Dict[Any, Ordering] = {}

    @classmethod
    def default(
        cls,
        date_format: str = DEFAULT_DATE_FORMAT,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
    ) -> 'TypeRegistry':
        """
        Build a registry with codecs for the common types.

        Args:
            date_format: strftime pattern for ``datetime.date`` columns
            datetime_format: strftime pattern for ``datetime.datetime`` columns
            time_format: strftime pattern for ``datetime.time`` columns

        Returns:
            New TypeRegistry instance
        """
        registry = cls()
        registry.set_codec(bool, BooleanCodec())
        registry.set_codec(int, IntegerCodec())
        registry.set_codec(float, FloatCodec())
        registry.set_codec(Decimal, DecimalCodec())
        registry.set_codec(date, DateCodec(date_format))
        registry.set_codec(datetime, DateTimeCodec(datetime_format))
        registry.set_codec(time, TimeCodec(time_format))
        for numeric in (bool, int, float, Decimal):
            registry.set_ordering(numeric, natural_ordering)
        return registry

    def copy(self) -> 'TypeRegistry':
        """Independent registry with the same entries."""
        clone = self.__class__()
        clone._codecs = dict(self._codecs)
        clone._orderings = dict(self._orderings)
        return clone

    def _lookup(self, table: Dict[Any, Any], semantic_type: Any) -> Any:
        if semantic_type in table:
            return table[semantic_type]
        for base in getattr(semantic_type, '__mro__', ())[1:]:
            if base in table:
                return table[base]
        return None

    def get_codec(self, semantic_type: Any) -> Optional[Codec]:
        """
        Get the codec for a type.

        Args:
            semantic_type: Column type

        Returns:
            Codec, or None if the type is not configured
        """
        return self._lookup(self._codecs, semantic_type)

    def get_string_codec(self) -> Codec:
        return self._codecs[str]

    def set_codec(self, semantic_type: Any, codec: Optional[Codec]) -> None:
        """
        Set (or remove, with None) the codec of a type.

        Setting None for ``str`` restores the default string codec. For
        temporal types a derived ordering is installed unless an ordering
        was set explicitly.
        """
        if semantic_type is str and codec is None:
            codec = StringCodec()
        if codec is None:
            self._codecs.pop(semantic_type, None)
            if isinstance(self._orderings.get(semantic_type), DerivedOrdering):
                del self._orderings[semantic_type]
            return
        self._codecs[semantic_type] = codec
        if is_temporal(semantic_type):
            current = self._orderings.get(semantic_type)
            if current is None or isinstance(current, DerivedOrdering):
                self._orderings[semantic_type] = DerivedOrdering(codec)
                logger.debug(f"Derived ordering installed for {semantic_type.__name__}")

    def get_ordering(self, semantic_type: Any) -> Optional[Ordering]:
        """Get the ordering function for a type, None if not configured."""
        return self._lookup(self._orderings, semantic_type)

    def set_ordering(self, semantic_type: Any, ordering: Optional[Ordering]) -> None:
        """
        Set (or remove, with None) the ordering of a type.

        Removing the ordering of a temporal type with a codec restores the
        derived ordering.
        """
        if ordering is None:
            self._orderings.pop(semantic_type, None)
            codec = self._codecs.get(semantic_type)
            if codec is not None and is_temporal(semantic_type):
                self._orderings[semantic_type] = DerivedOrdering(codec)
            return
        self._orderings[semantic_type] = ordering

    def is_orderable(self, semantic_type: Any) -> bool:
        """True if the type has both a codec and an ordering."""
        return (self.get_codec(semantic_type) is not None
                and self.get_ordering(semantic_type) is not None)


def create_default_registry(config=None) -> TypeRegistry:
    """
    Build the default registry, taking date/time formats from configuration.

    Args:
        config: Optional ConfigManager (PARSER section is read)

    Returns:
        New TypeRegistry instance
    """
    if config is None:
        return TypeRegistry.default()
    return TypeRegistry.default(
        date_format=config.get('PARSER', 'DATE_FORMAT') or DEFAULT_DATE_FORMAT,
        datetime_format=config.get('PARSER', 'DATETIME_FORMAT') or DEFAULT_DATETIME_FORMAT,
        time_format=config.get('PARSER', 'TIME_FORMAT') or DEFAULT_TIME_FORMAT,
    )
