"""
Wildcard Translator

Converts the glob-like patterns typed by users into regular expressions:

- ``*`` matches any sequence of characters (``.*``)
- ``?`` matches exactly one character (``.``)
- ``\\`` escapes the next character, so ``\\*`` is a literal star and
  ``\\\\`` a literal backslash; a trailing lone backslash is literal too
- regular expression metacharacters are always matched literally

The result also reports whether any wildcard or escape was processed,
which tells callers if the pattern is just a literal value.

This is a PURE PYTHON module with NO UI toolkit dependencies.
"""
from typing import NamedTuple

REGEX_METACHARACTERS = frozenset('[]^$+{}|().')

_LITERAL_BACKSLASH = '\\\\'


class WildcardTranslation(NamedTuple):
    """
    Outcome of a wildcard translation.

    Attributes:
        regex: Regular expression text (to be used with full matching)
        translated: True if the pattern contained wildcards or escapes
    """
    regex: str
    translated: bool


def to_regex(pattern: str) -> WildcardTranslation:
    """
    Translate a wildcard pattern into a regular expression.

    Single left-to-right scan, never fails.

    Args:
        pattern: Wildcard pattern as typed by the user

    Returns:
        WildcardTranslation with the regex and the translation flag

    Example:
        >>> to_regex("a*c.txt")
        WildcardTranslation(regex='a.*c\\\\.txt', translated=True)
    """
    parts = []
    escaped = False
    translated = False

    for char in pattern:
        if char == '\\':
            translated = True
            if escaped:
                parts.append(_LITERAL_BACKSLASH)
            escaped = not escaped
            continue

        if char in REGEX_METACHARACTERS:
            parts.append('\\' + char)
        elif char == '*':
            translated = True
            parts.append('\\*' if escaped else '.*')
        elif char == '?':
            translated = True
            parts.append('\\?' if escaped else '.')
        else:
            parts.append(char)
        escaped = False

    if escaped:
        parts.append(_LITERAL_BACKSLASH)

    return WildcardTranslation(''.join(parts), translated)


def has_wildcards(pattern: str) -> bool:
    """Check if a pattern would be interpreted as more than a literal."""
    return to_regex(pattern).translated


def with_trailing_wildcard(pattern: str) -> str:
    """
    Extend a pattern so it also matches any longer text.

    Args:
        pattern: Wildcard pattern

    Returns:
        The pattern followed by ``*``, or unchanged if it already ends with
        a wildcard star

    Example:
        >>> with_trailing_wildcard("Al")
        'Al*'
    """
    if to_regex(pattern).regex.endswith('.*'):
        return pattern
    # A lone trailing backslash reads as a literal one, keep it literal
    backslashes = len(pattern) - len(pattern.rstrip('\\'))
    return pattern + ('\\*' if backslashes % 2 else '*')
