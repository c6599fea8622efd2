# -*- coding: utf-8 -*-
"""
Expression Parser Module

Compiles the short expressions typed in a filter editor into predicates
over a single column:

- Comparison operators: ``>=``, ``>``, ``<=``, ``<``, ``<>``
- Equality operators: ``=``, ``==`` (equal) and ``!=``, ``!`` (distinct)
- Wildcard operators: ``~`` (match) and ``!~`` (no match), see wildcard.py
- Regular expression operator: ``~~``

Comparisons run on native values (parsed with the column codec and compared
with the column ordering) when the TypeRegistry provides them, and fall back
to comparing the formatted cell text with the raw right-hand side otherwise.
Wildcards and regular expressions always work on the formatted cell text.

Without an operator the expression is an equality test if the column codec
understands the text (``5`` on an int column) and a wildcard match otherwise.
While the user is still typing (``parse_instant``) such text is a prefix
match instead: ``Al`` is read as ``Al*``.

Compiled predicates close over the column index, codec and ordering, so they
can be evaluated repeatedly without re-parsing. Evaluation never raises.
"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from ..domain.column import ColumnDescriptor
from ..domain.exceptions import ParseError, RegexCompileError
from ..domain.predicate import Leaf, PredicateNode
from ..types.codecs import Codec
from ..types.type_registry import Ordering, TypeRegistry, natural_ordering
from .wildcard import to_regex, with_trailing_wildcard

logger = logging.getLogger('TableFilter.Core.Parser')


class Operator(Enum):
    """Operators understood by the parser, with their canonical spelling."""
    GTE = ">="
    GT = ">"
    LTE = "<="
    LT = "<"
    NEQ_CMP = "<>"
    EQ = "="
    NEQ_EQ = "!="
    RE = "~~"
    SIMPLE_RE_NEGATED = "!~"
    SIMPLE_RE_WILDCARD = "~"


# Every accepted spelling; the expression regex tries them longest first
OPERATOR_SPELLINGS: Dict[str, Operator] = {
    ">=": Operator.GTE,
    "<=": Operator.LTE,
    "<>": Operator.NEQ_CMP,
    "!=": Operator.NEQ_EQ,
    "!~": Operator.SIMPLE_RE_NEGATED,
    "~~": Operator.RE,
    "==": Operator.EQ,
    ">": Operator.GT,
    "<": Operator.LT,
    "=": Operator.EQ,
    "~": Operator.SIMPLE_RE_WILDCARD,
    "!": Operator.NEQ_EQ,
}

_EXPRESSION_RE = re.compile(
    r"\s*(>=|<=|<>|!=|!~|~~|==|>|<|=|~|!)?\s*(.*?)\s*$",
    re.DOTALL,
)


def split_expression(text: str):
    """
    Split an expression into its operator spelling and right-hand side.

    Args:
        text: Expression as typed

    Returns:
        tuple: (operator spelling or None, right-hand side, offset of the
        right-hand side in ``text``)
    """
    match = _EXPRESSION_RE.match(text)
    return match.group(1), match.group(2), match.start(2)


def _equality_ordering(left: Any, right: Any) -> int:
    return 0 if left == right else 1


class _Context:
    """Everything an operand needs to build one predicate."""

    __slots__ = ('parser', 'text', 'right', 'offset', 'column', 'description')

    def __init__(self, parser: 'ExpressionParser', text: str, right: str,
                 offset: int, column: ColumnDescriptor, description: str):
        self.parser = parser
        self.text = text
        self.right = right
        self.offset = offset
        self.column = column
        self.description = description


class _ComparisonOperand:
    """
    Operand comparing a cell with the right-hand side.

    Null cells never match, and on the string path neither do empty ones.

    Args:
        test: Receives the three-way comparison result, returns the match
        default_ordering: Ordering used when the type has a codec but no
            ordering; None forces the string fallback in that case
    """

    skips_empty = True

    def __init__(self, test: Callable[[int], bool],
                 default_ordering: Optional[Ordering] = None):
        self.test = test
        self.default_ordering = default_ordering

    def create(self, ctx: _Context) -> PredicateNode:
        column = ctx.column
        if column.is_string:
            return self.create_string_predicate(ctx, None)
        registry = ctx.parser.registry
        codec = registry.get_codec(column.semantic_type)
        if codec is None:
            return self.create_string_predicate(ctx, None)
        ordering = registry.get_ordering(column.semantic_type) or self.default_ordering
        if ordering is None:
            return self.create_string_predicate(ctx, codec)
        return self.create_value_predicate(ctx, codec, ordering)

    def create_value_predicate(self, ctx: _Context, codec: Codec,
                               ordering: Ordering) -> PredicateNode:
        right = None
        if ctx.right:
            try:
                right = codec.parse(ctx.right)
            except ParseError as e:
                raise e.shifted(ctx.offset) from None
        if right is None:
            return self.create_null_predicate(ctx)
        return Leaf(self.value_test(ctx.column.index, ordering, right), ctx.description)

    def value_test(self, index: int, ordering: Ordering, right: Any) -> Callable:
        test = self.test

        def include(record) -> bool:
            left = record.value_at(index)
            if left is None:
                return False
            try:
                return test(ordering(left, right))
            except (TypeError, ValueError, ParseError):
                return False

        return include

    def create_null_predicate(self, ctx: _Context) -> PredicateNode:
        raise ParseError("Missing value to compare with", ctx.offset)

    def create_string_predicate(self, ctx: _Context, codec: Optional[Codec]) -> PredicateNode:
        parser = ctx.parser
        formatter = codec or parser.registry.get_string_codec()
        fold = parser.fold
        right = fold(ctx.right)
        index = ctx.column.index
        test = self.test
        skips_empty = self.skips_empty

        def include(record) -> bool:
            left = format_value(formatter, record.value_at(index))
            if skips_empty and not left:
                return False
            return test(natural_ordering(fold(left), right))

        return Leaf(include, ctx.description)


class _EqualOperand(_ComparisonOperand):
    """
    Equality (or distinction) on values, falling back to strings.

    A null cell is distinct from every value, so ``= v`` and ``!= v``
    always split the rows in two.
    """

    skips_empty = False

    def __init__(self, equals: bool):
        super().__init__(lambda comparison: equals == (comparison == 0), _equality_ordering)
        self.equals = equals

    def value_test(self, index: int, ordering: Ordering, right: Any) -> Callable:
        equals = self.equals

        def include(record) -> bool:
            left = record.value_at(index)
            try:
                same = left is not None and ordering(left, right) == 0
            except (TypeError, ValueError, ParseError):
                same = False
            return equals == same

        return include

    def create_null_predicate(self, ctx: _Context) -> PredicateNode:
        index = ctx.column.index
        equals = self.equals

        def include(record) -> bool:
            return equals == (record.value_at(index) is None)

        return Leaf(include, ctx.description)


class _RegexOperand:
    """Full match of a regular expression against the formatted cell."""

    wildcard = False

    def __init__(self, matches: bool):
        self.matches = matches

    def create(self, ctx: _Context, codec: Optional[Codec] = None) -> PredicateNode:
        parser = ctx.parser
        if codec is None and not ctx.column.is_string:
            codec = parser.registry.get_codec(ctx.column.semantic_type)
        formatter = codec or parser.registry.get_string_codec()
        pattern = self.compile(ctx)
        index = ctx.column.index
        matches = self.matches

        def include(record) -> bool:
            left = format_value(formatter, record.value_at(index))
            return matches == (pattern.fullmatch(left) is not None)

        return Leaf(include, ctx.description)

    def compile(self, ctx: _Context):
        flags = re.IGNORECASE if ctx.parser.ignore_case else 0
        source = ctx.right
        if self.wildcard:
            source = to_regex(source).regex
            flags |= re.DOTALL
        try:
            return re.compile(source, flags)
        except re.error as e:
            position = ctx.offset + (e.pos or 0)
            raise RegexCompileError(
                f"Invalid regular expression: {e.msg}",
                max(0, min(position, len(ctx.text))),
            ) from None


class _WildcardOperand(_RegexOperand):
    wildcard = True


class _DefaultOperand(_EqualOperand):
    """
    Operand used when no operator is typed.

    Equality on values when the codec parses the text, wildcard match
    otherwise (strings, unknown types, or text the codec rejects).
    """

    def __init__(self, match_operand: _WildcardOperand):
        super().__init__(True)
        self.match_operand = match_operand

    def create_string_predicate(self, ctx: _Context, codec: Optional[Codec]) -> PredicateNode:
        return self.match_operand.create(ctx, codec)

    def create_value_predicate(self, ctx: _Context, codec: Codec,
                               ordering: Ordering) -> PredicateNode:
        try:
            return super().create_value_predicate(ctx, codec, ordering)
        except ParseError:
            return self.match_operand.create(ctx, codec)


def format_value(codec: Codec, value: Any) -> str:
    """Format a cell value, using ``str`` when the codec cannot handle it."""
    if value is None:
        return ""
    try:
        return codec.format(value)
    except (TypeError, ValueError, AttributeError):
        return str(value)


class ExpressionParser:
    """
    Compiles filter expressions into predicates.

    The operator table is built once per parser; ``parse`` itself keeps no
    state, so one parser can serve every editor of a table.

    Attributes:
        registry: TypeRegistry providing codecs and orderings
        ignore_case: Case-insensitive string comparisons and matches

    Example:
        >>> parser = ExpressionParser(TypeRegistry.default())
        >>> age = ColumnDescriptor(1, int)
        >>> predicate = parser.parse("> 5", age)
    """

    def __init__(self, registry: Optional[TypeRegistry] = None, ignore_case: bool = False):
        self.registry = registry if registry is not None else TypeRegistry.default()
        self.ignore_case = ignore_case

        match_operand = _WildcardOperand(True)
        self._operands = {
            Operator.GTE: _ComparisonOperand(lambda c: c >= 0),
            Operator.GT: _ComparisonOperand(lambda c: c > 0),
            Operator.LTE: _ComparisonOperand(lambda c: c <= 0),
            Operator.LT: _ComparisonOperand(lambda c: c < 0),
            Operator.NEQ_CMP: _ComparisonOperand(lambda c: c != 0),
            Operator.EQ: _EqualOperand(True),
            Operator.NEQ_EQ: _EqualOperand(False),
            Operator.RE: _RegexOperand(True),
            Operator.SIMPLE_RE_NEGATED: _WildcardOperand(False),
            Operator.SIMPLE_RE_WILDCARD: match_operand,
        }
        self._default_operand = _DefaultOperand(match_operand)
        self._instant_operand = match_operand

    @classmethod
    def from_config(cls, config, registry: Optional[TypeRegistry] = None) -> 'ExpressionParser':
        """Build a parser honoring the PARSER section of a ConfigManager."""
        return cls(registry, ignore_case=bool(config.get('PARSER', 'IGNORE_CASE')))

    def with_ignore_case(self, ignore_case: bool) -> 'ExpressionParser':
        """Parser sharing this registry with another case sensitivity."""
        if ignore_case == self.ignore_case:
            return self
        return self.__class__(self.registry, ignore_case)

    def fold(self, text: str) -> str:
        return text.casefold() if self.ignore_case else text

    def parse(self, text: str, column: ColumnDescriptor) -> PredicateNode:
        """
        Compile an expression for a column.

        Args:
            text: Expression, e.g. ``"> 5"``, ``"~ *smith*"``, ``"red"``
            column: Target column

        Returns:
            Predicate evaluating records

        Raises:
            ParseError: Invalid right-hand side; ``offset`` points into ``text``
            RegexCompileError: Invalid regular expression
        """
        spelling, right, offset = split_expression(text)
        if spelling is None:
            operand = self._default_operand
        else:
            operand = self._operands[OPERATOR_SPELLINGS[spelling]]
        predicate = operand.create(self._context(text, spelling, right, offset, column))
        logger.debug(f"Parsed {text!r} on {column}")
        return predicate

    def parse_instant(self, text: str, column: ColumnDescriptor) -> Tuple[PredicateNode, str]:
        """
        Compile an expression that is still being typed.

        Text without an operator is matched as a wildcard prefix: a trailing
        ``*`` is implied unless the pattern already ends with one, whatever
        the column type. Text with an operator compiles as in ``parse``.

        Args:
            text: Partial expression
            column: Target column

        Returns:
            tuple: (predicate, expression actually applied), e.g.
            ``parse_instant("Al", name)`` applies ``"Al*"``

        Raises:
            ParseError: Invalid right-hand side; ``offset`` points into ``text``
            RegexCompileError: Invalid regular expression
        """
        spelling, right, offset = split_expression(text)
        if spelling is not None:
            return self.parse(text, column), text.strip()
        applied = with_trailing_wildcard(right)
        ctx = self._context(text, None, applied, offset, column)
        predicate = self._instant_operand.create(ctx)
        logger.debug(f"Parsed {text!r} on {column} as {applied!r}")
        return predicate, applied

    def _context(self, text: str, spelling: Optional[str], right: str, offset: int,
                 column: ColumnDescriptor) -> _Context:
        description = " ".join(part for part in (column.label, spelling, right) if part)
        return _Context(self, text, right, offset, column, description)

    def escape(self, text: str, column: ColumnDescriptor) -> str:
        """
        Turn a cell's text into an expression matching exactly that text.

        Text that would be read as an operator or as a wildcard pattern is
        prefixed with ``"= "``; plain literals and values the column codec
        parses are returned as they are.

        Args:
            text: Formatted cell value
            column: Target column

        Returns:
            Expression text
        """
        expression = text.strip()
        spelling, _, _ = split_expression(expression)
        if spelling is not None:
            return f"= {expression}"
        if not column.is_string:
            codec = self.registry.get_codec(column.semantic_type)
            if codec is not None:
                try:
                    codec.parse(expression)
                    return expression
                except ParseError:
                    pass
        if to_regex(expression).translated:
            return f"= {expression}"
        return expression
