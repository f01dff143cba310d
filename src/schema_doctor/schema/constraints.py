"""Structural pattern matching over check-constraint text.

This is not a SQL parser. Two narrow shapes are recognized:

- the ``CHECK (<predicate>)`` wrapper returned by ``pg_get_constraintdef``
- a length bound on one column::

      [schema.](length | char_length | character_length)(<column>[::<type>]) <= <integer>

  with the column optionally wrapped in double quotes, single quotes or
  backticks, and matched case-insensitively.

Anything else yields None, which callers must read as "unknown", never as
"no constraint".

Usage:
    >>> length_limit_from_constraint("length(email) <= 64", "email")
    64
    >>> length_limit_from_constraint('char_length("name"::text) <= 32', "name")
    32
    >>> extract_check_predicate("CHECK (char_length(name::text) <= 32)")
    'char_length(name::text) <= 32'
"""

import re
from collections.abc import Iterable
from functools import lru_cache

_CHECK_WRAPPER = re.compile(r"CHECK \((.+)\)", re.DOTALL)


def extract_check_predicate(definition: str) -> str | None:
    """Return the predicate inside a ``CHECK (...)`` definition, if any."""
    match = _CHECK_WRAPPER.search(definition)
    return match.group(1) if match else None


@lru_cache(maxsize=256)
def _length_pattern(column: str) -> re.Pattern[str]:
    quote = r"[`\"']?"
    return re.compile(
        r"(?<![\w.])(?:\w+\.)?(?:char_|character_)?length\(\s*"
        rf"{quote}{re.escape(column)}{quote}"
        r"(?:::\w+(?:\s+\w+)*)?\s*\)"
        r"\s*<=\s*(?P<limit>\d+)",
        re.IGNORECASE,
    )


def length_limit_from_constraint(expression: str, column: str) -> int | None:
    """Return the length limit *expression* places on *column*, or None."""
    match = _length_pattern(column).search(expression)
    return int(match.group("limit")) if match else None


def length_limit_from_constraints(expressions: Iterable[str], column: str) -> int | None:
    """Return the limit from the first expression bounding *column*'s length."""
    for expression in expressions:
        limit = length_limit_from_constraint(expression, column)
        if limit is not None:
            return limit
    return None
