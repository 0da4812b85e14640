"""
One day of computed prayer times and the "what's next" queries over it.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from location import Location


class Prayer(str, Enum):
    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


PRAYER_ORDER = tuple(Prayer)


@dataclass(frozen=True)
class PrayerTime:
    prayer: Prayer
    time: time
    is_next: bool = False
    is_current: bool = False

    @property
    def name(self) -> str:
        return self.prayer.display_name


def _span(start: time, end: time) -> timedelta:
    anchor = date(2000, 1, 1)
    return datetime.combine(anchor, end) - datetime.combine(anchor, start)


def format_remaining(delta: timedelta) -> str:
    """'2h 45m', '12m' or 'Now' for less than a whole minute."""
    minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(max(minutes, 0), 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return "Now"


@dataclass(frozen=True)
class DailySchedule:
    date: date
    location: Location
    fajr: time
    sunrise: time
    dhuhr: time
    asr: time
    maghrib: time
    isha: time

    def time_of(self, prayer: Prayer) -> time:
        return getattr(self, Prayer(prayer).value)

    def items(self) -> list[tuple[Prayer, time]]:
        return [(prayer, self.time_of(prayer)) for prayer in PRAYER_ORDER]

    def next_prayer(self, now: time) -> PrayerTime | None:
        """First prayer strictly after `now`; None once Isha has passed."""
        for prayer, at in self.items():
            if at > now:
                return PrayerTime(prayer, at, is_next=True)
        return None

    def is_currently_active(self, prayer: Prayer, now: time) -> bool:
        index = PRAYER_ORDER.index(Prayer(prayer))
        if index == 0:
            return False
        previous = self.time_of(PRAYER_ORDER[index - 1])
        return previous < now < self.time_of(prayer)

    def prayers(self, now: time) -> list[PrayerTime]:
        upcoming = self.next_prayer(now)
        return [
            PrayerTime(
                prayer,
                at,
                is_next=upcoming is not None and upcoming.prayer is prayer,
                is_current=self.is_currently_active(prayer, now),
            )
            for prayer, at in self.items()
        ]

    def time_until_next(self, now: time) -> timedelta:
        upcoming = self.next_prayer(now)
        if upcoming is not None:
            return _span(now, upcoming.time)
        # all passed: tomorrow's Fajr, approximated by today's
        return _span(now, self.fajr) + timedelta(hours=24)

    def countdown(self, now: time) -> str:
        return format_remaining(self.time_until_next(now))

    def as_hhmm(self) -> dict[str, str]:
        return {prayer.value: at.strftime("%H:%M") for prayer, at in self.items()}
