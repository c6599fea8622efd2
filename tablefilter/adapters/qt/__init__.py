"""
Qt (PyQt5) adapters.

Requires the ``qt`` extra: ``pip install tablefilter[qt]``.
"""
from .qt_adapter import PredicateProxyModel, QtFilterView, QtModelDataSource

__all__ = [
    'PredicateProxyModel',
    'QtFilterView',
    'QtModelDataSource',
]
