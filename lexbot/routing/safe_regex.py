"""Reject regular expressions prone to catastrophic backtracking.

The pattern is parsed (never compiled) with the standard library's own
regex parser and the resulting tree is inspected:

* star height - an unbounded quantifier nested inside another quantifier
  that can repeat, as in ``(a+)+`` or ``(a+){2,10}``, is rejected;
* repetition count - more than :data:`MAX_REPETITIONS` quantifiers;
* length - more than :data:`MAX_LENGTH` characters.
"""

import re
from re import _constants as sre_constants
from re import _parser as sre_parse

from lexbot.errors import UnsafePatternError

MAX_LENGTH = 512
MAX_REPETITIONS = 25
# {n,m} with m at or below this bound counts as bounded
MAX_BOUNDED_REPEAT = 10

_REPEATS = {
    sre_constants.MAX_REPEAT,
    sre_constants.MIN_REPEAT,
    sre_constants.POSSESSIVE_REPEAT,
}


def check_pattern(pattern: str) -> None:
    """Raise :class:`UnsafePatternError` unless ``pattern`` is safe to compile."""
    if len(pattern) > MAX_LENGTH:
        raise UnsafePatternError(pattern, f"longer than {MAX_LENGTH} characters")

    try:
        tree = sre_parse.parse(pattern)
    except (re.error, OverflowError, RecursionError) as e:
        raise UnsafePatternError(pattern, f"invalid: {e}") from e

    counter = _Counter()
    _walk(pattern, tree, counter)


def is_safe(pattern: str) -> bool:
    try:
        check_pattern(pattern)
    except UnsafePatternError:
        return False
    return True


class _Counter:
    def __init__(self) -> None:
        self.repetitions = 0


def _walk(pattern: str, subpattern, counter: _Counter) -> bool:
    """Check ``subpattern``; return True if it holds an unbounded quantifier."""
    found = False
    for op, av in subpattern:
        if op in _REPEATS:
            _, hi, child = av
            counter.repetitions += 1
            if counter.repetitions > MAX_REPETITIONS:
                raise UnsafePatternError(
                    pattern, f"more than {MAX_REPETITIONS} repetitions"
                )
            inner = _walk(pattern, child, counter)
            # an unbounded body may appear at most once
            if inner and hi > 1:
                raise UnsafePatternError(pattern, "nested unbounded quantifiers")
            unbounded = hi == sre_constants.MAXREPEAT or hi > MAX_BOUNDED_REPEAT
            found = found or inner or unbounded
        elif op is sre_constants.SUBPATTERN:
            found = _walk(pattern, av[-1], counter) or found
        elif op is sre_constants.BRANCH:
            for branch in av[1]:
                found = _walk(pattern, branch, counter) or found
        elif op in (sre_constants.ASSERT, sre_constants.ASSERT_NOT):
            found = _walk(pattern, av[1], counter) or found
        elif op is sre_constants.ATOMIC_GROUP:
            found = _walk(pattern, av, counter) or found
        elif op is sre_constants.GROUPREF_EXISTS:
            _, yes, no = av
            found = _walk(pattern, yes, counter) or found
            if no is not None:
                found = _walk(pattern, no, counter) or found
    return found
