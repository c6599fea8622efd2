"""
Choice extraction for choice editors.
"""
from .extractor import (
    ChoiceSet,
    ColumnValueExtractor,
    CustomChoice,
    extract_all,
    is_blank,
)

__all__ = [
    'ChoiceSet',
    'ColumnValueExtractor',
    'CustomChoice',
    'extract_all',
    'is_blank',
]
