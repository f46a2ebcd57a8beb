from datetime import datetime, timedelta, timezone

import pytest

from scheduling.core.formatting import AppointmentDateFormatter
from scheduling.core.timeutils import start_of_hour, to_utc_naive


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (datetime(2031, 3, 5, 9, 0), 'dia 05 de março, às 9:00h'),
        (datetime(2031, 12, 24, 18, 30), 'dia 24 de dezembro, às 18:30h'),
        (datetime(2031, 1, 1, 0, 5), 'dia 01 de janeiro, às 0:05h'),
    ],
)
def test_format_uses_portuguese_long_date(value: datetime, expected: str) -> None:
    assert AppointmentDateFormatter('UTC').format(value) == expected


def test_format_converts_naive_utc_to_display_timezone() -> None:
    formatter = AppointmentDateFormatter('America/Sao_Paulo')

    assert formatter.format(datetime(2031, 7, 1, 2, 0)) == 'dia 30 de junho, às 23:00h'


def test_start_of_hour_floors_minutes_seconds_and_microseconds() -> None:
    assert start_of_hour(datetime(2031, 3, 5, 9, 59, 59, 999999)) == datetime(2031, 3, 5, 9, 0)


def test_to_utc_naive_converts_aware_values() -> None:
    aware = datetime(2031, 3, 5, 9, 0, tzinfo=timezone(timedelta(hours=-3)))

    assert to_utc_naive(aware) == datetime(2031, 3, 5, 12, 0)
    assert to_utc_naive(datetime(2031, 3, 5, 9, 0)) == datetime(2031, 3, 5, 9, 0)
