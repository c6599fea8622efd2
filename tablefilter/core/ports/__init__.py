"""
TableFilter Ports.

Abstract interfaces at the boundary of the core:

- DataSourcePort: the tabular data and its change events
- FilterableViewPort: the consuming view
- RecordAccessor: per-record access during predicate evaluation
"""
from .data_source_port import (
    ChangeType,
    TableChange,
    DataSourceListener,
    DataSourcePort,
)
from .record_port import (
    RecordAccessor,
    RowRecord,
    SequenceRecord,
)
from .view_port import (
    FilteredListener,
    FilterableViewPort,
)

__all__ = [
    'ChangeType',
    'TableChange',
    'DataSourceListener',
    'DataSourcePort',
    'RecordAccessor',
    'RowRecord',
    'SequenceRecord',
    'FilteredListener',
    'FilterableViewPort',
]
