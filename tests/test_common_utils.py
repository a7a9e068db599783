from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from src.site_kiosk.site_kiosk.common.datetime_utils import export_date, to_iso
from src.site_kiosk.site_kiosk.common.ids import new_id


def test_new_id_is_unique_uuid_string():
    ids = {new_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(len(i) == 36 for i in ids)


def test_iso_timestamp_format(fixed_now):
    assert to_iso(fixed_now) == "2026-02-01T08:30:00.000Z"
    assert to_iso(fixed_now.replace(microsecond=123456)) == "2026-02-01T08:30:00.123Z"


def test_iso_timestamp_converts_to_utc():
    plus_two = timezone(timedelta(hours=2))
    assert to_iso(datetime(2026, 2, 1, 10, 30, tzinfo=plus_two)) == "2026-02-01T08:30:00.000Z"


def test_iso_timestamps_sort_chronologically(fixed_now):
    stamps = [to_iso(fixed_now + timedelta(milliseconds=ms)) for ms in (0, 5, 999, 1000, 60_000)]
    assert sorted(stamps) == stamps


def test_export_date():
    assert export_date(date(2026, 1, 9)) == "2026-01-09"
