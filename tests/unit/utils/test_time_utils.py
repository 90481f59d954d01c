from datetime import datetime, timedelta, timezone

from planterbox.utils.time import coerce_datetime, from_epoch_ms, to_epoch_ms, utc_now


def test_coerce_datetime_parses_z_suffix():
    dt = coerce_datetime("2026-01-01T00:00:00Z")
    assert dt is not None
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.isoformat().endswith("+00:00")


def test_coerce_datetime_parses_offset():
    dt = coerce_datetime("2026-01-01T02:00:00+02:00")
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.hour == 0


def test_coerce_datetime_parses_naive_as_utc():
    dt = coerce_datetime("2026-01-01T00:00:00")
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)

    time_diff = utc_now() - dt
    assert isinstance(time_diff, timedelta)


def test_coerce_datetime_rejects_garbage():
    assert coerce_datetime("yesterday") is None
    assert coerce_datetime(12345) is None
    assert coerce_datetime(None) is None


def test_epoch_ms_round_trip_is_exact():
    dt = datetime(2026, 3, 1, 12, 0, 0, 250_000, tzinfo=timezone.utc)
    ms = to_epoch_ms(dt)
    assert ms % 1000 == 250
    assert from_epoch_ms(ms) == dt


def test_to_epoch_ms_treats_naive_as_utc():
    naive = datetime(2026, 3, 1, 12, 0)
    aware = naive.replace(tzinfo=timezone.utc)
    assert to_epoch_ms(naive) == to_epoch_ms(aware)
