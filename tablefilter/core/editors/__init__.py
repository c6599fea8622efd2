"""
Column editors producing observable predicates.
"""
from .base_editor import EditorKind, FilterEditor
from .text_editor import TextFilterEditor
from .choice_editor import ChoiceFilterEditor

__all__ = [
    'EditorKind',
    'FilterEditor',
    'TextFilterEditor',
    'ChoiceFilterEditor',
]
