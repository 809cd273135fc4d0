"""Tests for server clock helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from subscription_backend.util import time_utils


def test_to_iso8601_z_uses_milliseconds():
    dt = datetime(2025, 9, 15, 14, 30, 0, 123456, tzinfo=timezone.utc)

    assert time_utils.to_iso8601_z(dt) == "2025-09-15T14:30:00.123Z"


def test_to_iso8601_z_converts_offsets():
    dt = datetime(2025, 9, 15, 16, 30, 0, tzinfo=timezone(timedelta(hours=2)))

    assert time_utils.to_iso8601_z(dt) == "2025-09-15T14:30:00.000Z"


@pytest.mark.parametrize("raw", [
    "2025-09-15T14:30:00Z",
    "2025-09-15T14:30:00.000Z",
    "2025-09-15T16:30:00+02:00",
])
def test_parse_iso8601_z_formats(raw):
    assert time_utils.parse_iso8601_z(raw) == datetime(2025, 9, 15, 14, 30, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw", ["", "not-a-date", None])
def test_parse_iso8601_z_rejects_garbage(raw):
    with pytest.raises(ValueError):
        time_utils.parse_iso8601_z(raw)


def test_epoch_millis():
    dt = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert time_utils.to_epoch_millis(dt) == 1704067200000


def test_latest():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    later = now + timedelta(days=2)

    assert time_utils.latest(None, now) == now
    assert time_utils.latest(later, now) == later
    assert time_utils.latest(now - timedelta(days=2), now) == now
