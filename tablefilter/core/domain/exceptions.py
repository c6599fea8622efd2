# -*- coding: utf-8 -*-
"""
TableFilter Domain Exceptions

Hierarchical exception system for TableFilter.
All library-specific exceptions inherit from TableFilterError,
enabling both fine-grained and broad exception handling.

Usage::

    from tablefilter.core.domain.exceptions import ParseError, RegexCompileError

    try:
        predicate = parser.parse(text, column)
    except RegexCompileError as e:
        highlight(e.offset)
    except ParseError as e:
        highlight(e.offset)
    except TableFilterError as e:
        handle_any_tablefilter(e)
"""


# ──────────────────────────────────────────────
# Base
# ──────────────────────────────────────────────

class TableFilterError(Exception):
    """Base exception for all TableFilter errors."""


# ──────────────────────────────────────────────
# Parsing errors
# ──────────────────────────────────────────────

class ParseError(TableFilterError):
    """Expression text (or a codec input) could not be parsed.

    Args:
        message: Human-readable description.
        offset: Character position in the original text where parsing failed.
    """

    def __init__(self, message: str = "", offset: int = 0):
        self.message = message or f"Invalid expression at position {offset}"
        self.offset = offset
        super().__init__(self.message)

    def shifted(self, delta: int) -> 'ParseError':
        """Return a copy of this error with the offset moved by ``delta``."""
        return self.__class__(self.message, self.offset + delta)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, offset={self.offset})"


class RegexCompileError(ParseError):
    """A regular expression (explicit or translated from a wildcard) is invalid."""


# ──────────────────────────────────────────────
# Evaluation errors
# ──────────────────────────────────────────────

class MissingColumnError(TableFilterError, LookupError):
    """A record does not provide the column a predicate refers to.

    Raised by record accessors; predicates treat it as "does not match".
    """

    def __init__(self, column_index: int, message: str = ""):
        self.column_index = column_index
        super().__init__(message or f"Record has no column {column_index}")


# ──────────────────────────────────────────────
# Configuration & views
# ──────────────────────────────────────────────

class ConfigurationError(TableFilterError):
    """Configuration is invalid or missing."""


class ViewError(TableFilterError):
    """A consuming view was used in a way it does not support."""


__all__ = [
    # Base
    'TableFilterError',
    # Parsing
    'ParseError',
    'RegexCompileError',
    # Evaluation
    'MissingColumnError',
    # Configuration & views
    'ConfigurationError',
    'ViewError',
]
