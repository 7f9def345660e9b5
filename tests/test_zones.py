"""Zone resolution tests."""

from datetime import timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from dateutil import tz as dateutil_tz

from pyfly import UTC, ZoneResolutionError, local_zone, resolve_zone


class TestResolveZone:
    @pytest.mark.parametrize("name", ["", "UTC"])
    def test_utc(self, name):
        assert resolve_zone(name) is UTC
        assert UTC is timezone.utc

    def test_local(self):
        assert isinstance(resolve_zone("Local"), dateutil_tz.tzlocal)
        assert isinstance(local_zone(), dateutil_tz.tzlocal)

    def test_iana(self):
        zone = resolve_zone("America/New_York")
        assert isinstance(zone, ZoneInfo)
        assert zone.key == "America/New_York"

    def test_unknown(self):
        with pytest.raises(ZoneResolutionError) as exc_info:
            resolve_zone("nowhere")
        assert str(exc_info.value) == "unknown time zone"
        assert "'nowhere'" in exc_info.value.internal()
        assert isinstance(exc_info.value.wrapped, ZoneInfoNotFoundError)

    def test_malformed_key(self):
        with pytest.raises(ZoneResolutionError):
            resolve_zone("../etc/passwd")

    def test_is_lookup_error(self):
        with pytest.raises(LookupError):
            resolve_zone("Mars/Olympus_Mons")
