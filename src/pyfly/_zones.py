"""Zone-name resolution against the platform time zone database."""

from __future__ import annotations

import logging
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz as dateutil_tz

from pyfly._constants import LOCAL_ZONE_NAME, UTC_ZONE_NAMES
from pyfly._errors import ERR_MSG_UNKNOWN_ZONE, ZoneResolutionError

logger = logging.getLogger(__name__)

UTC: tzinfo = timezone.utc


def local_zone() -> tzinfo:
    """Return the system's local zone, with its daylight-saving rules."""
    return dateutil_tz.tzlocal()


def resolve_zone(name: str) -> tzinfo:
    """Resolve a zone name.

    ``""`` and ``"UTC"`` resolve to UTC, ``"Local"`` to the system's local
    zone, and anything else is looked up as an IANA identifier such as
    ``"America/New_York"``.

    Raises:
        ZoneResolutionError: If the name is not in the time zone database.
    """
    if name in UTC_ZONE_NAMES:
        return UTC
    if name == LOCAL_ZONE_NAME:
        return local_zone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # ValueError and OSError cover malformed keys and directory names.
        logger.debug("cannot resolve zone %r: %s", name, e)
        raise ZoneResolutionError(
            ERR_MSG_UNKNOWN_ZONE, f"unknown time zone {name!r}", wrapped=e
        ) from e
