"""Duration value type and Go-style duration string parsing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from lark import Lark, Token, Tree
from lark.exceptions import LarkError

from pyfly._constants import (
    HOUR,
    MAX_DURATION,
    MAX_FRACTION_DIGITS,
    MICROSECOND,
    MILLISECOND,
    MIN_DURATION,
    MINUTE,
    SECOND,
    UNIT_NANOSECONDS,
)
from pyfly._errors import (
    ERR_MSG_DURATION_OUT_OF_RANGE,
    ERR_MSG_INVALID_DURATION,
    ERR_MSG_MISSING_UNIT,
    ERR_MSG_UNSUPPORTED_DURATION_TYPE,
    ParseError,
    UnsupportedTypeError,
)
from pyfly._utils import format_fraction

logger = logging.getLogger(__name__)

DURATION_GRAMMAR = r"""
duration: SIGN? (term+ | NUMBER)
term: NUMBER UNIT

SIGN: "+" | "-"
NUMBER: /(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)/
UNIT: /(?:ns|us|µs|μs|ms|s|m|h)/
"""

_parser = Lark(DURATION_GRAMMAR, start="duration", parser="lalr")

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, order=True)
class Duration:
    """Signed count of nanoseconds, bounded to the signed 64-bit range."""

    nanoseconds: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.nanoseconds, bool) or not isinstance(self.nanoseconds, int):
            raise TypeError(
                f"Duration requires an int nanosecond count, got {type(self.nanoseconds).__name__}"
            )
        if not MIN_DURATION <= self.nanoseconds <= MAX_DURATION:
            raise OverflowError(f"duration {self.nanoseconds}ns out of range")

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Duration:
        return cls((value // timedelta(microseconds=1)) * MICROSECOND)

    def to_timedelta(self) -> timedelta:
        """Convert to a ``timedelta``; sub-microsecond digits are truncated toward zero."""
        micros = abs(self.nanoseconds) // MICROSECOND
        return timedelta(microseconds=-micros if self.nanoseconds < 0 else micros)

    def hours(self) -> float:
        whole, rest = divmod(self.nanoseconds, HOUR)
        return whole + rest / HOUR

    def minutes(self) -> float:
        whole, rest = divmod(self.nanoseconds, MINUTE)
        return whole + rest / MINUTE

    def seconds(self) -> float:
        whole, rest = divmod(self.nanoseconds, SECOND)
        return whole + rest / SECOND

    def __add__(self, other: object) -> Duration:
        if isinstance(other, timedelta):
            other = Duration.from_timedelta(other)
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanoseconds + other.nanoseconds)

    __radd__ = __add__

    def __sub__(self, other: object) -> Duration:
        if isinstance(other, timedelta):
            other = Duration.from_timedelta(other)
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanoseconds - other.nanoseconds)

    def __rsub__(self, other: object) -> Duration:
        if not isinstance(other, timedelta):
            return NotImplemented
        return Duration(Duration.from_timedelta(other).nanoseconds - self.nanoseconds)

    def __neg__(self) -> Duration:
        return Duration(-self.nanoseconds)

    def __abs__(self) -> Duration:
        return Duration(abs(self.nanoseconds))

    def __bool__(self) -> bool:
        return self.nanoseconds != 0

    def __str__(self) -> str:
        return format_duration(self.nanoseconds)


DurationAmount = Union[Duration, timedelta, str]
"""A pre-built duration value, or text to be parsed into one."""


def format_duration(nanoseconds: int) -> str:
    """Render a nanosecond count the way Go prints durations, e.g. ``72h3m0.5s``."""
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    if u < SECOND:
        # Sub-second values use a smaller unit with a fraction: 1.5µs, 300ms.
        if u < MICROSECOND:
            return f"{sign}{u}ns"
        if u < MILLISECOND:
            return f"{sign}{format_fraction(u, 3)}µs"
        return f"{sign}{format_fraction(u, 6)}ms"

    out = format_fraction(u % MINUTE, 9) + "s"
    u //= MINUTE
    if u > 0:
        out = f"{u % 60}m{out}"
        u //= 60
        if u > 0:
            out = f"{u}h{out}"
    return sign + out


def _scale_term(number: str, unit: str, text: str) -> int:
    """Scale ``number`` (decimal text) into nanoseconds of ``unit``."""
    unit_ns = UNIT_NANOSECONDS[unit]
    whole, _, frac = number.partition(".")
    value = int(whole or "0") * unit_ns
    frac = frac[:MAX_FRACTION_DIGITS]
    if frac:
        value += int(int(frac) * (unit_ns / 10 ** len(frac)))
    if value > -MIN_DURATION:
        raise ParseError(ERR_MSG_DURATION_OUT_OF_RANGE, f"invalid duration {text!r}")
    return value


def _evaluate(tree: Tree, text: str) -> int:
    negative = False
    total = 0
    for child in tree.children:
        if isinstance(child, Token) and child.type == "SIGN":
            negative = child == "-"
        elif isinstance(child, Token) and child.type == "NUMBER":
            # A bare number is only valid as the literal zero.
            if child != "0":
                raise ParseError(ERR_MSG_MISSING_UNIT, f"missing unit in duration {text!r}")
        else:
            number, unit = child.children
            total += _scale_term(str(number), str(unit), text)
            if total > -MIN_DURATION:
                raise ParseError(ERR_MSG_DURATION_OUT_OF_RANGE, f"invalid duration {text!r}")

    if negative:
        return -total
    if total > MAX_DURATION:
        raise ParseError(ERR_MSG_DURATION_OUT_OF_RANGE, f"invalid duration {text!r}")
    return total


def parse_duration(text: str) -> Duration:
    """Parse a Go-style duration string such as ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    A duration string is an optionally signed sequence of decimal numbers, each
    with an optional fraction and a unit suffix. Valid units are ``ns``, ``us``
    (or ``µs``), ``ms``, ``s``, ``m`` and ``h``. The bare string ``"0"`` is also
    accepted. Whitespace is not allowed.

    Raises:
        ParseError: If the string is not a valid duration.
        UnsupportedTypeError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise UnsupportedTypeError(
            ERR_MSG_UNSUPPORTED_DURATION_TYPE,
            f"cannot parse duration from {type(text).__name__}",
        )
    try:
        tree = _parser.parse(text)
    except LarkError as e:
        logger.debug("rejected duration %r: %s", text, e)
        raise ParseError(
            ERR_MSG_INVALID_DURATION, f"invalid duration {text!r}", wrapped=e
        ) from e
    try:
        return Duration(_evaluate(tree, text))
    except ParseError as e:
        logger.debug("rejected duration %r: %s", text, e.internal())
        raise


def resolve_duration(amount: DurationAmount) -> Duration:
    """Resolve a duration amount to a :class:`Duration`.

    Strings have all whitespace removed before parsing, so ``"2h 2m"`` and
    ``"3h "`` are accepted.

    Raises:
        ParseError: If a string amount is not a valid duration.
        UnsupportedTypeError: If the amount is of any other type.
    """
    if isinstance(amount, Duration):
        return amount
    if isinstance(amount, timedelta):
        return Duration.from_timedelta(amount)
    if isinstance(amount, str):
        return parse_duration(_WHITESPACE_RE.sub("", amount))
    logger.debug("rejected duration amount of type %s", type(amount).__name__)
    raise UnsupportedTypeError(
        ERR_MSG_UNSUPPORTED_DURATION_TYPE,
        f"unknown duration instance {amount!r} of type {type(amount).__name__}",
    )
