"""
Type handling: codecs and the TypeRegistry.
"""
from .codecs import (
    Codec,
    StringCodec,
    BooleanCodec,
    IntegerCodec,
    FloatCodec,
    DecimalCodec,
    DateCodec,
    DateTimeCodec,
    TimeCodec,
    FunctionCodec,
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_TIME_FORMAT,
)
from .type_registry import (
    Ordering,
    TypeRegistry,
    DerivedOrdering,
    natural_ordering,
    is_temporal,
    create_default_registry,
)

__all__ = [
    'Codec',
    'StringCodec',
    'BooleanCodec',
    'IntegerCodec',
    'FloatCodec',
    'DecimalCodec',
    'DateCodec',
    'DateTimeCodec',
    'TimeCodec',
    'FunctionCodec',
    'DEFAULT_DATE_FORMAT',
    'DEFAULT_DATETIME_FORMAT',
    'DEFAULT_TIME_FORMAT',
    'Ordering',
    'TypeRegistry',
    'DerivedOrdering',
    'natural_ordering',
    'is_temporal',
    'create_default_registry',
]
