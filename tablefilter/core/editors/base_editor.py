# -*- coding: utf-8 -*-
"""
Filter Editor Base

An editor owns the ObservablePredicate of one column. Whatever the kind
(text, choice), the TableFilter only ever sees that observable, so it stays
ignorant of the concrete editor classes.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from ..domain.column import ColumnDescriptor
from ..domain.predicate import PredicateNode
from ..filter.expression_parser import ExpressionParser
from ..filter.observable import ObservablePredicate

logger = logging.getLogger('TableFilter.Core.Editors')


class EditorKind(Enum):
    """Kinds of predicate sources."""
    TEXT = "text"
    CHOICE = "choice"
    CUSTOM = "custom"


class FilterEditor(ABC):
    """
    Base class of the column editors.

    Attributes:
        column: Column being filtered
        filter: Observable published to the TableFilter
    """

    kind: EditorKind = EditorKind.CUSTOM

    def __init__(self, column: ColumnDescriptor, parser: ExpressionParser):
        self.column = column
        self._parser = parser
        self.filter = ObservablePredicate(name=f"{self.kind.value} editor {column.label}")
        self._disposed = False

    @property
    def parser(self) -> ExpressionParser:
        return self._parser

    def set_parser(self, parser: ExpressionParser) -> None:
        """Use another parser (e.g. other case sensitivity) and rebuild the predicate."""
        if parser is self._parser:
            return
        self._parser = parser
        self.refresh()

    @property
    def predicate(self) -> Optional[PredicateNode]:
        return self.filter.current_predicate

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @abstractmethod
    def refresh(self) -> None:
        """Rebuild and publish the predicate from the editor's content."""

    def _publish(self, predicate: Optional[PredicateNode]) -> None:
        self.filter.publish(predicate)

    def dispose(self) -> None:
        """Detach the observable from every TableFilter using it."""
        if self._disposed:
            return
        self._disposed = True
        self.filter.detach()
        logger.debug(f"Disposed {self.filter.name}")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.column}>"
