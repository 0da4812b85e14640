from datetime import date, time, timedelta

import pytest

from daily_schedule import DailySchedule, Prayer, format_remaining
from location import Location


@pytest.fixture
def schedule() -> DailySchedule:
    return DailySchedule(
        date=date(2024, 3, 20),
        location=Location(25.2048, 55.2708, 4.0),
        fajr=time(5, 0),
        sunrise=time(6, 30),
        dhuhr=time(12, 15),
        asr=time(15, 45),
        maghrib=time(18, 20),
        isha=time(19, 50),
    )


def test_items_in_canonical_order(schedule) -> None:
    assert [p for p, _ in schedule.items()] == [
        Prayer.FAJR, Prayer.SUNRISE, Prayer.DHUHR, Prayer.ASR, Prayer.MAGHRIB, Prayer.ISHA,
    ]
    assert schedule.time_of("asr") == time(15, 45)


@pytest.mark.parametrize(
    "now, expected",
    [
        (time(0, 0), Prayer.FAJR),
        (time(5, 0), Prayer.SUNRISE),
        (time(12, 15), Prayer.ASR),
        (time(19, 49, 59), Prayer.ISHA),
    ],
)
def test_next_prayer_is_strictly_after_now(schedule, now, expected) -> None:
    upcoming = schedule.next_prayer(now)
    assert upcoming.prayer is expected
    assert upcoming.is_next


def test_no_next_prayer_after_isha(schedule) -> None:
    assert schedule.next_prayer(time(19, 50)) is None
    assert schedule.next_prayer(time(23, 0)) is None


def test_fajr_is_never_active(schedule) -> None:
    assert not schedule.is_currently_active(Prayer.FAJR, time(4, 0))
    assert not schedule.is_currently_active(Prayer.FAJR, time(23, 0))


def test_currently_active_is_open_interval(schedule) -> None:
    assert schedule.is_currently_active(Prayer.DHUHR, time(10, 0))
    assert not schedule.is_currently_active(Prayer.DHUHR, time(12, 15))
    assert not schedule.is_currently_active(Prayer.DHUHR, time(6, 30))
    assert schedule.is_currently_active(Prayer.ASR, time(13, 0))


def test_annotated_prayers(schedule) -> None:
    rows = schedule.prayers(time(13, 0))
    assert [r.name for r in rows] == ["Fajr", "Sunrise", "Dhuhr", "Asr", "Maghrib", "Isha"]
    assert [r.prayer for r in rows if r.is_next] == [Prayer.ASR]
    assert [r.prayer for r in rows if r.is_current] == [Prayer.ASR]


def test_annotated_prayers_after_isha(schedule) -> None:
    rows = schedule.prayers(time(21, 0))
    assert not any(r.is_next for r in rows)
    assert not any(r.is_current for r in rows)


@pytest.mark.parametrize(
    "now, remaining, text",
    [
        (time(13, 0), timedelta(hours=2, minutes=45), "2h 45m"),
        (time(18, 10), timedelta(minutes=10), "10m"),
        (time(19, 49, 30), timedelta(seconds=30), "Now"),
        (time(21, 0), timedelta(hours=8), "8h 0m"),
    ],
)
def test_time_until_next(schedule, now, remaining, text) -> None:
    assert schedule.time_until_next(now) == remaining
    assert schedule.countdown(now) == text


def test_format_remaining_zero() -> None:
    assert format_remaining(timedelta(0)) == "Now"
    assert format_remaining(timedelta(minutes=61)) == "1h 1m"


def test_as_hhmm(schedule) -> None:
    assert schedule.as_hhmm() == {
        "fajr": "05:00",
        "sunrise": "06:30",
        "dhuhr": "12:15",
        "asr": "15:45",
        "maghrib": "18:20",
        "isha": "19:50",
    }


def test_schedule_is_immutable(schedule) -> None:
    with pytest.raises(AttributeError):
        schedule.fajr = time(4, 0)
