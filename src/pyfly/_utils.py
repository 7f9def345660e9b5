"""Formatting helpers for Go-style timestamp and duration layouts."""

from __future__ import annotations

from datetime import timedelta


def format_fraction(value: int, precision: int) -> str:
    """Render ``value / 10**precision`` with trailing fraction zeros trimmed.

    ``format_fraction(1500, 3)`` is ``"1.5"``; ``format_fraction(2000, 3)`` is ``"2"``.
    """
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    if digits:
        return f"{whole}.{digits}"
    return str(whole)


def format_subsecond(nanos: int) -> str:
    """Render a nanosecond fraction as ``.ddd``, or ``""`` when it is zero."""
    if nanos == 0:
        return ""
    return "." + f"{nanos:09d}".rstrip("0")


def format_offset(offset: timedelta | None) -> str:
    """Render a UTC offset as ``+hhmm``; seconds are dropped like Go's ``-0700``."""
    if offset is None:
        return "+0000"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    total = abs(total)
    hours, rest = divmod(total, 3600)
    return f"{sign}{hours:02d}{rest // 60:02d}"
