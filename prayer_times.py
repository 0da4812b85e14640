"""
Prayer times for one day from solar geometry and a calculation method.
Fajr/Isha fall back to a night-fraction rule when the sun never reaches the
required depression angle (high latitudes around midsummer).
"""

import logging
from datetime import date, datetime
from typing import TypedDict

import astronomy
from calculation_methods import HighLatitudeAdjustment
from daily_schedule import PRAYER_ORDER, DailySchedule, Prayer
from location import Location
from prayer_settings import PrayerSettings

logger = logging.getLogger(__name__)


class PrayerTimesError(ValueError):
    code = "prayer_times_error"

    def __init__(self, message: str):
        super().__init__(f"{self.code}: {message}")
        self.message = message


class InvalidLocation(PrayerTimesError):
    code = "invalid_location"


class NoLocation(PrayerTimesError):
    code = "no_location"


class SunNeverRisesOrSets(PrayerTimesError):
    code = "sun_never_rises_or_sets"


class PrayerUnresolvable(PrayerTimesError):
    code = "prayer_unresolvable"

    def __init__(self, prayer: Prayer | str):
        self.prayer = Prayer(prayer)
        super().__init__(f"{self.prayer.value} time could not be resolved")


class PrayerTimesResult(TypedDict):
    fajr: str
    sunrise: str
    dhuhr: str
    asr: str
    maghrib: str
    isha: str


def _normalize_hour_24(hours: float) -> float:
    """Normalize hour to [0, 24)."""
    h = hours % 24.0
    return h if h >= 0 else h + 24.0


def night_duration(sunrise: float, sunset: float) -> float:
    """Span between sunrise and sunset, taken across midnight when sunset reads earlier."""
    if sunset < sunrise:
        return 24.0 - sunrise + sunset
    return sunset - sunrise


def _dark_span(sunrise: float, sunset: float) -> float:
    """Hours from sunset to the following sunrise."""
    return _normalize_hour_24(sunrise + 24.0 - sunset)


def high_latitude_fallback(
    rule: HighLatitudeAdjustment,
    prayer: Prayer,
    sunrise: float,
    sunset: float,
    angle: float,
) -> float | None:
    """
    Estimate Fajr or Isha from the night length. Returns None when the rule
    has no estimate to offer.
    """
    morning = prayer is Prayer.FAJR

    if rule is HighLatitudeAdjustment.MIDDLE_OF_NIGHT:
        dark = _dark_span(sunrise, sunset)
        middle = sunset + dark / 2.0
        estimate = middle + dark / 4.0 if morning else middle - dark / 4.0
    elif rule is HighLatitudeAdjustment.ONE_SEVENTH_OF_NIGHT:
        portion = night_duration(sunrise, sunset) / 7.0
        estimate = sunrise - portion if morning else sunset + portion
    elif rule is HighLatitudeAdjustment.ANGLE_BASED:
        # linear proxy, not derived from the sun's path
        portion = night_duration(sunrise, sunset) * (angle / 60.0)
        estimate = sunrise - portion if morning else sunset + portion
    else:
        return None
    return _normalize_hour_24(estimate)


def _with_fallback(
    primary: float | None,
    settings: PrayerSettings,
    prayer: Prayer,
    sunrise: float,
    sunset: float,
    angle: float,
) -> float | None:
    if primary is not None:
        return primary
    rule = settings.high_latitude_adjustment
    logger.debug("%s has no direct solution; applying %s", prayer.value, rule.value)
    return high_latitude_fallback(rule, prayer, sunrise, sunset, angle)


def _isha(location: Location, jd: float, settings: PrayerSettings, sunrise: float, sunset: float) -> float | None:
    angle = settings.effective_isha_angle()
    if angle is not None:
        primary = astronomy.isha_by_angle(location, jd, angle)
        return _with_fallback(primary, settings, Prayer.ISHA, sunrise, sunset, angle)
    delay = settings.effective_isha_delay()
    if delay is not None:
        # sunset is already known here, so the delay always resolves
        return astronomy.isha_by_delay(location, jd, delay)
    return None


def calculate_prayer_times(
    day: date,
    location: Location | None,
    settings: PrayerSettings,
) -> DailySchedule:
    """
    Compute the six daily times for `day` at `location`.

    Falls back to settings.location when location is None. Raises a
    PrayerTimesError subclass when any of the six times cannot be resolved;
    a schedule is never returned partially filled.
    """
    location = location if location is not None else settings.location
    if location is None:
        raise NoLocation("no location supplied")
    if not location.is_valid():
        raise InvalidLocation(f"coordinates out of range: {location.latitude}, {location.longitude}")

    jd = astronomy.julian_day(day)
    noon = astronomy.solar_noon(location, jd)
    sunrise = astronomy.sunrise(location, jd)
    sunset = astronomy.sunset(location, jd)
    if sunrise is None or sunset is None:
        logger.debug("no sunrise/sunset at %s on %s", location.display_name, day)
        raise SunNeverRisesOrSets(f"sun does not rise and set at {location.display_name} on {day.isoformat()}")

    fajr_angle = settings.effective_fajr_angle()
    fajr = _with_fallback(
        astronomy.fajr(location, jd, fajr_angle), settings, Prayer.FAJR, sunrise, sunset, fajr_angle
    )
    asr = astronomy.asr(location, jd, settings.asr_convention.shadow_factor)
    isha = _isha(location, jd, settings, sunrise, sunset)

    decimal_hours = {
        Prayer.FAJR: fajr,
        Prayer.SUNRISE: sunrise,
        Prayer.DHUHR: noon,
        Prayer.ASR: asr,
        Prayer.MAGHRIB: sunset,
        Prayer.ISHA: isha,
    }

    times = {}
    for prayer in PRAYER_ORDER:
        hours = decimal_hours[prayer]
        if hours is not None:
            hours += settings.offset_for(prayer) / 60.0
        local = astronomy.to_local_time(hours)
        if local is None:
            logger.debug("%s unresolved at %s on %s (hours=%s)", prayer.value, location.display_name, day, hours)
            raise PrayerUnresolvable(prayer)
        times[prayer.value] = local

    return DailySchedule(date=day, location=location, **times)


def get_prayer_times(
    lat: float,
    lng: float,
    date: str,
    timezone_offset_minutes: float,
    settings: PrayerSettings | None = None,
    altitude: float = 0.0,
) -> PrayerTimesResult:
    """
    Get prayer times for one day as 'HH:MM' strings.
    date: 'YYYY-MM-DD'
    timezone_offset_minutes: same as JavaScript getTimezoneOffset() (UTC - local, e.g. -180 for Turkey).
    """
    try:
        day = datetime.strptime(date, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError("date must be YYYY-MM-DD") from None
    location = Location.from_minutes(lat, lng, -timezone_offset_minutes, altitude=altitude)
    schedule = calculate_prayer_times(day, location, settings or PrayerSettings())
    return PrayerTimesResult(**schedule.as_hhmm())
