from datetime import date, datetime, timezone

import pytest

from wellness.time_utils import parse_iso_date, to_iso_date, utc_timestamp


@pytest.mark.parametrize(
    'text, expected',
    [
        ('2024-05-01', date(2024, 5, 1)),
        (' 2024-05-01 ', date(2024, 5, 1)),
        ('2024-05-01T08:00:00Z', date(2024, 5, 1)),
        ('2024-05-01T23:59:59.123+02:00', date(2024, 5, 1)),
        ('2024-05-01T08:00:00', date(2024, 5, 1)),
    ],
)
def test_parse_iso_date_accepts_dates_and_timestamps(text, expected):
    assert parse_iso_date(text) == expected


@pytest.mark.parametrize(
    'text', ['', '2024-05-01garbage', '2024-05-01xx', '2024-02-30', 'tomorrow']
)
def test_parse_iso_date_rejects_other_text(text):
    with pytest.raises(ValueError):
        parse_iso_date(text)


def test_to_iso_date_normalises_datetimes_to_utc():
    late = datetime(2024, 5, 1, 23, 30, tzinfo=timezone.utc)
    assert to_iso_date(late) == '2024-05-01'
    assert to_iso_date(date(2024, 5, 1)) == '2024-05-01'


def test_utc_timestamp_has_z_suffix():
    stamp = utc_timestamp(datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc))
    assert stamp == '2024-05-01T08:00:00.000Z'
