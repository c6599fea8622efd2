"""
TableFilter Adapters.

Implementations of the core ports:

- memory: list-backed data source and view (no dependencies)
- qt: Qt item models (PyQt5, imported on demand)
"""
from .memory import InMemoryDataSource, InMemoryTableView

__all__ = [
    'InMemoryDataSource',
    'InMemoryTableView',
]
