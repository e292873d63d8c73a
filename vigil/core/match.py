"""
Predicate matching for event filtering.

A ``Matcher`` is one of exactly three kinds:

* ``Pattern``   - a regular expression searched for in a string value.
* ``Predicate`` - a callable invoked with the value.
* ``Literal``   - a value compared with ``==``.

``match`` dispatches on the matcher's kind.  A pattern tested against
something that is not a string is simply a non-match: predicates come
from configuration and values from live events, and one odd event must
not abort evaluation of a whole stream.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Union

from vigil.utils.logger import deprecated


class MatcherKind(Enum):
    """The closed set of matcher kinds."""

    PATTERN = "pattern"
    PREDICATE = "predicate"
    LITERAL = "literal"


class Matcher:
    """Base class for the three matcher kinds."""

    kind: ClassVar[MatcherKind]

    __slots__ = ()


@dataclass(frozen=True)
class Pattern(Matcher):
    """
    Regular-expression matcher.

    Attributes:
        regex: Compiled expression. A string is compiled on construction.
    """

    kind: ClassVar[MatcherKind] = MatcherKind.PATTERN

    regex: "re.Pattern[str]"

    def __post_init__(self) -> None:
        if isinstance(self.regex, str):
            object.__setattr__(self, "regex", re.compile(self.regex))


@dataclass(frozen=True)
class Predicate(Matcher):
    """
    Callable matcher.

    Attributes:
        fn: Called with the value; its result is the match result.
    """

    kind: ClassVar[MatcherKind] = MatcherKind.PREDICATE

    fn: Callable[[Any], Any]


@dataclass(frozen=True)
class Literal(Matcher):
    """
    Equality matcher.

    Attributes:
        value: Compared with the target using ``==``.
    """

    kind: ClassVar[MatcherKind] = MatcherKind.LITERAL

    value: Any


def match(matcher: Matcher, value: Any) -> Any:
    """
    Does *matcher* describe *value*?

    Returns:
        For patterns and literals a ``bool``.  For predicates, whatever
        the callable returns.

    Raises:
        Whatever a ``Predicate``'s callable raises.
    """
    kind = matcher.kind
    if kind is MatcherKind.PATTERN:
        if not isinstance(value, str):
            return False
        try:
            return matcher.regex.search(value) is not None
        except TypeError:
            # bytes pattern against a str value
            return False
    if kind is MatcherKind.PREDICATE:
        return matcher.fn(value)
    if kind is MatcherKind.LITERAL:
        return matcher.value == value
    raise TypeError(f"Unknown matcher kind: {kind!r}")


def as_matcher(obj: Any) -> Matcher:
    """
    Lift a raw configuration value into a matcher.

    Compiled regular expressions become ``Pattern``, callables become
    ``Predicate``, matchers pass through, and everything else becomes
    ``Literal``.  Plain strings are literals, not patterns.
    """
    if isinstance(obj, Matcher):
        return obj
    if isinstance(obj, re.Pattern):
        return Pattern(obj)
    if callable(obj):
        return Predicate(obj)
    return Literal(obj)


@deprecated("re_matches is replaced by match(Pattern(regex), value)")
def re_matches(
    regex: Union[str, "re.Pattern[str]"], string: Optional[str],
) -> Optional["re.Match[str]"]:
    """Search *string* for *regex*; ``None`` when *string* is ``None``."""
    if string is None:
        return None
    return re.search(regex, string)
