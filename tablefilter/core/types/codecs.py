# -*- coding: utf-8 -*-
"""
Codecs: text <-> value conversion for the column types.

A codec turns the right-hand side of an expression into a native value
(``parse``) and turns cell values into the string used by wildcard and
string comparisons (``format``). Parse failures raise ParseError with an
offset relative to the codec input.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from ..domain.exceptions import ParseError

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_TIME_FORMAT = "%H:%M:%S"

_UNCONVERTED_RE = re.compile(r"unconverted data remains: (.*)$", re.DOTALL)


class Codec(ABC):
    """Parse/format pair for one semantic type."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """
        Convert text into a value.

        Raises:
            ParseError: offset relative to ``text``
        """

    def format(self, value: Any) -> str:
        """Convert a value into text; None formats as an empty string."""
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class StringCodec(Codec):
    """Identity codec, the fallback for every unknown type."""

    def parse(self, text: str) -> str:
        return text


class BooleanCodec(Codec):

    TRUE_TEXT = "true"
    FALSE_TEXT = "false"

    def parse(self, text: str) -> bool:
        lowered = text.strip().casefold()
        if lowered == self.TRUE_TEXT:
            return True
        if lowered == self.FALSE_TEXT:
            return False
        raise ParseError(f"Not a boolean: {text!r}", 0)

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return self.TRUE_TEXT if value else self.FALSE_TEXT


class _NumberCodec(Codec):
    """Shared parse logic for numeric types."""

    number_type: Callable = int
    errors = (ValueError,)
    # Characters besides digits a valid literal may hold
    symbols = "+-_ "

    def parse(self, text: str):
        try:
            return self.number_type(text)
        except self.errors:
            raise ParseError(f"Not a valid {self.number_type.__name__}: {text!r}",
                             _first_invalid_offset(text, self.symbols)) from None


class IntegerCodec(_NumberCodec):
    number_type = int


class FloatCodec(_NumberCodec):
    number_type = float
    symbols = "+-.eE_ "

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return repr(float(value))


class DecimalCodec(_NumberCodec):
    number_type = Decimal
    errors = (InvalidOperation, ValueError)
    symbols = "+-.eE_ "


class _StrptimeCodec(Codec):
    """Codec for temporal types driven by a strftime/strptime pattern."""

    def __init__(self, pattern: str):
        self.pattern = pattern

    def _strptime(self, text: str) -> datetime:
        try:
            return datetime.strptime(text, self.pattern)
        except ValueError as e:
            match = _UNCONVERTED_RE.search(str(e))
            offset = len(text) - len(match.group(1)) if match else 0
            raise ParseError(f"{text!r} does not match format {self.pattern!r}", offset) from None

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return value.strftime(self.pattern)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.pattern!r})"


class DateCodec(_StrptimeCodec):

    def __init__(self, pattern: str = DEFAULT_DATE_FORMAT):
        super().__init__(pattern)

    def parse(self, text: str) -> date:
        return self._strptime(text).date()


class DateTimeCodec(_StrptimeCodec):

    def __init__(self, pattern: str = DEFAULT_DATETIME_FORMAT):
        super().__init__(pattern)

    def parse(self, text: str) -> datetime:
        return self._strptime(text)


class TimeCodec(_StrptimeCodec):

    def __init__(self, pattern: str = DEFAULT_TIME_FORMAT):
        super().__init__(pattern)

    def parse(self, text: str) -> time:
        return self._strptime(text).time()


class FunctionCodec(Codec):
    """
    Codec built from plain callables.

    Exceptions other than ParseError raised by ``parse_fn`` are reported as
    ParseError at offset 0.

    Example:
        >>> upper = FunctionCodec(str.upper, str.lower)
    """

    def __init__(self, parse_fn: Callable[[str], Any],
                 format_fn: Optional[Callable[[Any], str]] = None):
        self.parse_fn = parse_fn
        self.format_fn = format_fn

    def parse(self, text: str) -> Any:
        try:
            return self.parse_fn(text)
        except ParseError:
            raise
        except (ValueError, TypeError, ArithmeticError, LookupError) as e:
            raise ParseError(str(e), 0) from None

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        if self.format_fn is None:
            return str(value)
        return self.format_fn(value)


def _first_invalid_offset(text: str, symbols: str) -> int:
    """Best effort position of the first character a number cannot contain."""
    for i, char in enumerate(text):
        if not (char.isdigit() or char in symbols):
            return i
    return 0
