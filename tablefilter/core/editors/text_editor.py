# -*- coding: utf-8 -*-
"""
Text Filter Editor

Free-text editor: the user types an expression (``> 5``, ``~ A*``, ``red``)
that is compiled by the ExpressionParser.

- ``set_text`` applies a finished expression and records it in the history
- ``type_text`` filters while the user is typing: plain text is matched as
  a prefix, see ExpressionParser.parse_instant
"""

import logging
from typing import List, Optional

from ..domain.column import ColumnDescriptor
from ..domain.exceptions import ParseError
from ..filter.expression_parser import ExpressionParser
from .base_editor import EditorKind, FilterEditor

logger = logging.getLogger('TableFilter.Core.Editors.Text')

DEFAULT_MAX_HISTORY = 10


class TextFilterEditor(FilterEditor):
    """
    Editor compiling typed expressions.

    Blank text means no filtering. Text that fails to parse leaves the
    previous predicate in place; the error is returned and kept in ``error``
    so the UI can highlight the offending position.

    Attributes:
        max_history: Number of applied expressions remembered, 0 for none

    Example:
        >>> editor = TextFilterEditor(ColumnDescriptor(1, int, "age"), parser)
        >>> editor.set_text("> 18") is None
        True
        >>> editor.set_text("> abc").offset
        2
    """

    kind = EditorKind.TEXT

    def __init__(self, column: ColumnDescriptor, parser: ExpressionParser, text: str = "",
                 max_history: int = DEFAULT_MAX_HISTORY):
        super().__init__(column, parser)
        self._text = ""
        self._applied_text = ""
        self._instant = False
        self._error: Optional[ParseError] = None
        self._history: List[str] = []
        self.max_history = max_history
        if text:
            self.set_text(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def applied_text(self) -> str:
        """Expression the current predicate was compiled from."""
        return self._applied_text

    @property
    def error(self) -> Optional[ParseError]:
        """Error of the current text, None when it compiled."""
        return self._error

    @property
    def is_valid(self) -> bool:
        return self._error is None

    def set_text(self, text: str) -> Optional[ParseError]:
        """
        Compile and publish a new expression.

        Args:
            text: Expression as typed

        Returns:
            ParseError if the text is invalid, None otherwise
        """
        error = self._apply(text, instant=False)
        if error is None and text.strip():
            self._remember(text.strip())
        return error

    def type_text(self, text: str) -> Optional[ParseError]:
        """
        Compile and publish an expression the user has not finished typing.

        Nothing is added to the history; a later ``set_text`` commits it.

        Returns:
            ParseError if the text is invalid, None otherwise
        """
        return self._apply(text, instant=True)

    def _apply(self, text: str, instant: bool) -> Optional[ParseError]:
        self._text = text
        self._instant = instant
        if not text.strip():
            self._error = None
            self._applied_text = ""
            self._publish(None)
            return None
        try:
            if instant:
                predicate, applied = self._parser.parse_instant(text, self.column)
            else:
                predicate, applied = self._parser.parse(text, self.column), text.strip()
        except ParseError as e:
            self._error = e
            logger.debug(f"Keeping previous filter on {self.column}: {e.message} at {e.offset}")
            return e
        self._error = None
        self._applied_text = applied
        self._publish(predicate)
        return None

    def clear(self) -> None:
        self.set_text("")

    def refresh(self) -> None:
        self._apply(self._text, self._instant)

    # =========================================================================
    # History
    # =========================================================================

    @property
    def history(self) -> tuple:
        """Applied expressions, most recent first, without duplicates."""
        return tuple(self._history)

    def _remember(self, expression: str) -> None:
        if self.max_history <= 0:
            return
        if expression in self._history:
            self._history.remove(expression)
        self._history.insert(0, expression)
        del self._history[self.max_history:]

    def set_max_history(self, size: int) -> None:
        """Change the history size, dropping the oldest entries beyond it."""
        if size < 0:
            raise ValueError(f"History size must be positive, got {size}")
        self.max_history = size
        del self._history[size:]

    def clear_history(self) -> None:
        self._history.clear()
