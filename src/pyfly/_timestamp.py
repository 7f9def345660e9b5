"""Timestamp value type: construction, arithmetic, zone conversion and rounding."""

from __future__ import annotations

import functools
import logging
import time
from datetime import datetime, timedelta, timezone, tzinfo

import humanize as _humanize

from pyfly._constants import (
    DEFAULT_HUMANIZE_MINIMUM_UNIT,
    DEFAULT_HUMANIZE_MONTHS,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    SECOND,
    UNIX_TO_ZERO_SECONDS,
)
from pyfly._duration import Duration, DurationAmount, parse_duration, resolve_duration
from pyfly._errors import (
    ERR_MSG_UNSUPPORTED_DURATION_TYPE,
    ERR_MSG_UNSUPPORTED_INSTANT_TYPE,
    UnsupportedTypeError,
)
from pyfly._utils import format_offset, format_subsecond
from pyfly._zones import UTC, local_zone, resolve_zone

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)


def _unix_nanos(value: datetime) -> int:
    """Nanoseconds since the Unix epoch for an aware datetime."""
    return ((value - _EPOCH) // _ONE_MICROSECOND) * MICROSECOND


def _zone(tz: tzinfo | str) -> tzinfo:
    if isinstance(tz, str):
        return resolve_zone(tz)
    return tz


@functools.total_ordering
class Timestamp:
    """An absolute instant with nanosecond precision, displayed in a zone.

    Timestamps are immutable: :meth:`add`, :meth:`to`, :meth:`floor` and
    :meth:`ceil` return new values. Equality and ordering compare the instant
    only, so the same moment seen from two zones compares equal.
    """

    __slots__ = ("_unix_ns", "_tz")

    def __init__(self, unix_ns: int, tz: tzinfo = UTC) -> None:
        if isinstance(unix_ns, bool) or not isinstance(unix_ns, int):
            raise TypeError(
                f"Timestamp requires an int nanosecond count, got {type(unix_ns).__name__}"
            )
        object.__setattr__(self, "_unix_ns", unix_ns)
        object.__setattr__(self, "_tz", tz)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Timestamp is immutable")

    def __reduce__(self):
        return (Timestamp, (self._unix_ns, self._tz))

    # ---- Accessors ----

    @property
    def tzinfo(self) -> tzinfo:
        return self._tz

    def unix_nano(self) -> int:
        return self._unix_ns

    def to_datetime(self) -> datetime:
        """Return an aware ``datetime`` in this timestamp's zone.

        ``datetime`` carries microseconds, so the last three digits of the
        nanosecond fraction are dropped.
        """
        return (_EPOCH + timedelta(microseconds=self._unix_ns // MICROSECOND)).astimezone(
            self._tz
        )

    @property
    def year(self) -> int:
        return self.to_datetime().year

    @property
    def month(self) -> int:
        return self.to_datetime().month

    @property
    def day(self) -> int:
        return self.to_datetime().day

    @property
    def hour(self) -> int:
        return self.to_datetime().hour

    @property
    def minute(self) -> int:
        return self.to_datetime().minute

    @property
    def second(self) -> int:
        return self.to_datetime().second

    def weekday(self) -> int:
        return self.to_datetime().weekday()

    def zone(self) -> tuple[str, int]:
        """Return the zone abbreviation in effect and its offset east of UTC in seconds."""
        wall = self.to_datetime()
        offset = wall.utcoffset() or timedelta(0)
        name = wall.tzname() or format_offset(offset)
        return name, int(offset.total_seconds())

    def millisecond(self) -> int:
        """Millisecond within the second, in ``[0, 999]``."""
        return self.nanosecond() // MILLISECOND

    def microsecond(self) -> int:
        """Microsecond within the millisecond, in ``[0, 999]``."""
        return (self.nanosecond() // MICROSECOND) % 1000

    def nanosecond(self) -> int:
        """Full fraction of the second in nanoseconds, in ``[0, 999999999]``."""
        return self._unix_ns % SECOND

    # ---- Arithmetic ----

    def add(self, amount: DurationAmount) -> Timestamp:
        """Move the time forward by a duration.

        ``amount`` is a :class:`Duration`, a ``timedelta``, or a duration string
        such as ``"300ms"``, ``"-1.5h"`` or ``"2h 45m"`` (whitespace is
        ignored). Negative amounts move the time backward. The zone is kept.

        Raises:
            ParseError: If a string amount cannot be parsed.
            UnsupportedTypeError: If the amount is of any other type.
        """
        offset = resolve_duration(amount)
        return Timestamp(self._unix_ns + offset.nanoseconds, self._tz)

    def sub(self, amount: DurationAmount) -> Timestamp:
        """Move the time backward by a duration; the inverse of :meth:`add`."""
        offset = resolve_duration(amount)
        return Timestamp(self._unix_ns - offset.nanoseconds, self._tz)

    def __add__(self, other: object) -> Timestamp:
        if isinstance(other, (Duration, timedelta)):
            return self.add(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: object) -> Duration | Timestamp:
        if isinstance(other, Timestamp):
            return Duration(self._unix_ns - other._unix_ns)
        if isinstance(other, (Duration, timedelta)):
            return self.sub(other)
        return NotImplemented

    # ---- Zones ----

    def to(self, name: str) -> Timestamp:
        """Return the same instant in the zone identified by ``name``.

        ``""`` and ``"UTC"`` give UTC, ``"Local"`` gives the system zone, and
        any IANA identifier such as ``"Asia/Shanghai"`` gives that zone.

        Raises:
            ZoneResolutionError: If the zone is unknown.
        """
        return self.in_zone(resolve_zone(name))

    def in_zone(self, tz: tzinfo) -> Timestamp:
        return Timestamp(self._unix_ns, tz)

    # ---- Rounding ----

    def _offset_in(self, unit: int) -> int:
        """Nanoseconds elapsed since the last ``unit`` boundary counted from the zero time."""
        return (self._unix_ns + UNIX_TO_ZERO_SECONDS * SECOND) % unit

    def round(self, unit: Duration | timedelta | str) -> Timestamp:
        """Round to the nearest multiple of ``unit`` since the zero time.

        Halfway values round up. A unit of zero or less returns the
        timestamp unchanged.
        """
        d = _rounding_unit(unit).nanoseconds
        if d <= 0:
            return self
        r = self._offset_in(d)
        if r + r < d:
            return Timestamp(self._unix_ns - r, self._tz)
        return Timestamp(self._unix_ns + (d - r), self._tz)

    def _past_half(self, unit: int) -> bool:
        """Whether the time is past the middle of its ``unit`` period.

        The period is the one :meth:`round` snaps to, so the display zone
        does not matter. Only the canonical units 1h, 1m, 1s, 1ms and 1us
        are recognised; any other unit reports False.
        """
        if unit == HOUR:
            return self._offset_in(HOUR) // MINUTE > 30
        if unit == MINUTE:
            return self._offset_in(MINUTE) // SECOND > 30
        if unit == SECOND:
            return self._offset_in(SECOND) // MILLISECOND > 500
        if unit == MILLISECOND:
            return self._offset_in(MILLISECOND) // MICROSECOND > 500
        if unit == MICROSECOND:
            return self._offset_in(MICROSECOND) > 500
        return False

    def floor(self, unit: Duration | timedelta | str) -> Timestamp:
        """Round down to a unit boundary, e.g. ``floor("1h")``.

        A unit of zero or less returns the timestamp unchanged.

        Raises:
            ParseError: If ``unit`` is a string that cannot be parsed.
        """
        d = _rounding_unit(unit)
        if d.nanoseconds <= 0:
            return self
        rounded = self.round(d)
        if self._past_half(d.nanoseconds):
            return rounded.sub(d)
        return rounded

    def ceil(self, unit: Duration | timedelta | str) -> Timestamp:
        """Round up to a unit boundary, e.g. ``ceil("1m")``.

        A unit of zero or less returns the timestamp unchanged.

        Raises:
            ParseError: If ``unit`` is a string that cannot be parsed.
        """
        d = _rounding_unit(unit)
        if d.nanoseconds <= 0:
            return self
        rounded = self.round(d)
        if self._past_half(d.nanoseconds):
            return rounded
        return rounded.add(d)

    # ---- Formatting ----

    def humanize(
        self,
        when: Timestamp | datetime | None = None,
        *,
        months: bool = DEFAULT_HUMANIZE_MONTHS,
        minimum_unit: str = DEFAULT_HUMANIZE_MINIMUM_UNIT,
    ) -> str:
        """Describe the distance from ``when`` (default: now), e.g. ``"an hour from now"``.

        Args:
            when: Reference instant. Naive datetimes are taken as local time.
            months: Passed to ``humanize.naturaltime``.
            minimum_unit: Passed to ``humanize.naturaltime``.
        """
        if when is None:
            reference = datetime.now(timezone.utc)
        elif isinstance(when, Timestamp):
            reference = when.to_datetime()
        else:
            reference = when.astimezone(timezone.utc)
        return _humanize.naturaltime(
            _naive_utc(self.to_datetime()),
            months=months,
            minimum_unit=minimum_unit,
            when=_naive_utc(reference),
        )

    def __str__(self) -> str:
        wall = self.to_datetime()
        name, _ = self.zone()
        return (
            f"{wall.year:04d}-{wall.month:02d}-{wall.day:02d} "
            f"{wall.hour:02d}:{wall.minute:02d}:{wall.second:02d}"
            f"{format_subsecond(self.nanosecond())} "
            f"{format_offset(wall.utcoffset())} {name}"
        )

    def __repr__(self) -> str:
        return f"Timestamp({str(self)!r})"

    # ---- Comparison ----

    def equal(self, other: Timestamp) -> bool:
        """Whether both timestamps denote the same instant, regardless of zone."""
        return self._unix_ns == other._unix_ns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._unix_ns == other._unix_ns

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._unix_ns < other._unix_ns

    def __hash__(self) -> int:
        return hash(self._unix_ns)


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _rounding_unit(unit: Duration | timedelta | str) -> Duration:
    if isinstance(unit, Duration):
        return unit
    if isinstance(unit, timedelta):
        return Duration.from_timedelta(unit)
    if isinstance(unit, str):
        return parse_duration(unit)
    logger.debug("rejected rounding unit of type %s", type(unit).__name__)
    raise UnsupportedTypeError(
        ERR_MSG_UNSUPPORTED_DURATION_TYPE,
        f"unknown rounding unit {unit!r} of type {type(unit).__name__}",
    )


# ---- Constructors ----


def now() -> Timestamp:
    """Return the current instant in the local zone."""
    return Timestamp(time.time_ns(), local_zone())


def utc_now() -> Timestamp:
    """Return the current instant in UTC."""
    return Timestamp(time.time_ns(), UTC)


def from_instant(value: datetime | Timestamp) -> Timestamp:
    """Wrap a ``datetime``, keeping its zone.

    Naive datetimes are interpreted as local time and get the local zone.

    Raises:
        UnsupportedTypeError: If ``value`` is not a datetime or Timestamp.
    """
    if isinstance(value, Timestamp):
        return value
    if not isinstance(value, datetime):
        logger.debug("rejected instant of type %s", type(value).__name__)
        raise UnsupportedTypeError(
            ERR_MSG_UNSUPPORTED_INSTANT_TYPE,
            f"cannot build a timestamp from {type(value).__name__}",
        )
    if value.tzinfo is None or value.utcoffset() is None:
        return Timestamp(_unix_nanos(value.astimezone(timezone.utc)), local_zone())
    return Timestamp(_unix_nanos(value), value.tzinfo)


def from_unix_nano(ns: int, tz: tzinfo | str = UTC) -> Timestamp:
    """Wrap a count of nanoseconds since the Unix epoch.

    Raises:
        ZoneResolutionError: If ``tz`` is a zone name that cannot be resolved.
    """
    return Timestamp(ns, _zone(tz))


def date(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    nanosecond: int = 0,
    tz: tzinfo | str = UTC,
) -> Timestamp:
    """Build a timestamp from wall-clock fields in ``tz``.

    Args:
        year, month, day, hour, minute, second: Calendar fields, validated
            the way ``datetime`` validates them.
        nanosecond: Fraction of the second, in ``[0, 999999999]``.
        tz: A ``tzinfo`` or a zone name (see :meth:`Timestamp.to`).

    Raises:
        ValueError: If a field is out of range.
        ZoneResolutionError: If ``tz`` is a zone name that cannot be resolved.
    """
    if not 0 <= nanosecond < SECOND:
        raise ValueError(f"nanosecond must be in [0, 999999999], got {nanosecond}")
    zone = _zone(tz)
    wall = datetime(
        year, month, day, hour, minute, second, nanosecond // MICROSECOND, tzinfo=zone
    )
    return Timestamp(_unix_nanos(wall) + nanosecond % MICROSECOND, zone)


def since(ts: Timestamp) -> Duration:
    """Return the time elapsed since ``ts``."""
    return Duration(time.time_ns() - ts.unix_nano())
