"""
Services orchestrating the core components.
"""
from .filters_handler import FiltersHandler

__all__ = ['FiltersHandler']
