"""pyfly - Fluent timestamps: duration arithmetic, zone conversion, rounding, humanizing."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfly")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0.dev0"

from pyfly._constants import (
    DAY,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    WEEK,
)
from pyfly._duration import Duration, DurationAmount, parse_duration, resolve_duration
from pyfly._errors import FlyError, ParseError, UnsupportedTypeError, ZoneResolutionError
from pyfly._timestamp import (
    Timestamp,
    date,
    from_instant,
    from_unix_nano,
    now,
    since,
    utc_now,
)
from pyfly._zones import UTC, local_zone, resolve_zone

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "now",
    "utc_now",
    "from_instant",
    "from_unix_nano",
    "date",
    "since",
    "parse_duration",
    "resolve_duration",
    "resolve_zone",
    "local_zone",
    "Timestamp",
    "Duration",
    "DurationAmount",
    "FlyError",
    "ParseError",
    "UnsupportedTypeError",
    "ZoneResolutionError",
    "UTC",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
