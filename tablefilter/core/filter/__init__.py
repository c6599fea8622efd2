"""
Filter core: parsing, observables and the TableFilter composition root.
"""
from .wildcard import WildcardTranslation, to_regex, has_wildcards, with_trailing_wildcard, REGEX_METACHARACTERS
from .expression_parser import (
    Operator,
    OPERATOR_SPELLINGS,
    ExpressionParser,
    split_expression,
    format_value,
)
from .observable import FilterObserver, ObservablePredicate
from .composed_filter import ComposedFilter, AndFilter, OrFilter, NotFilter
from .user_filter import UserFilter, as_predicate
from .table_filter import TableFilter, NotificationState

__all__ = [
    'WildcardTranslation',
    'to_regex',
    'has_wildcards',
    'with_trailing_wildcard',
    'REGEX_METACHARACTERS',
    'Operator',
    'OPERATOR_SPELLINGS',
    'ExpressionParser',
    'split_expression',
    'format_value',
    'FilterObserver',
    'ObservablePredicate',
    'ComposedFilter',
    'AndFilter',
    'OrFilter',
    'NotFilter',
    'UserFilter',
    'as_predicate',
    'TableFilter',
    'NotificationState',
]
