"""Unit sizes, bounds and defaults shared across pyfly."""

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

MAX_DURATION = (1 << 63) - 1
"""Largest representable duration, in nanoseconds."""

MIN_DURATION = -(1 << 63)
"""Smallest representable duration, in nanoseconds."""

UNIT_NANOSECONDS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # MICRO SIGN
    "μs": MICROSECOND,  # GREEK SMALL LETTER MU
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

MAX_FRACTION_DIGITS = 18
"""Fraction digits kept when scaling a decimal magnitude into its unit."""

UTC_ZONE_NAMES = frozenset({"", "UTC"})
LOCAL_ZONE_NAME = "Local"

UNIX_TO_ZERO_SECONDS = 62_135_596_800
"""Seconds from 0001-01-01T00:00:00Z to the Unix epoch; rounding is anchored there."""

DEFAULT_HUMANIZE_MONTHS = True
DEFAULT_HUMANIZE_MINIMUM_UNIT = "seconds"
