"""
Solar position math for prayer times (USNO low-precision model, J2000.0).

All times are local decimal hours. A geometric "no solution" (the sun never
reaches the requested altitude) is reported as None, never as NaN or 0.
"""

import math
from datetime import date, time

from location import Location

J2000 = 2451545.0
SUNRISE_SUNSET_ANGLE = 0.833
ALTITUDE_DIP_FACTOR = 0.0347


def _deg2rad(d: float) -> float:
    return d * math.pi / 180.0


def _rad2deg(r: float) -> float:
    return r * 180.0 / math.pi


def _normalize_angle_360(degrees: float) -> float:
    """Normalize angle to [0, 360)."""
    d = degrees % 360.0
    return d if d >= 0 else d + 360.0


def julian_day(day: date, at: time = time(0)) -> float:
    """Julian Day of `day` at UT clock time `at` (midnight by default)."""
    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12
    A = math.floor(year / 100)
    B = 2 - A + math.floor(A / 4)
    jd = math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day.day + B - 1524.5
    ut = at.hour + at.minute / 60.0 + (at.second + at.microsecond / 1e6) / 3600.0
    return jd + ut / 24.0


def _solar_coordinates(jd: float) -> tuple[float, float]:
    """
    Returns (declination in radians, equation of time in minutes).
    """
    D = jd - J2000
    g = _normalize_angle_360(357.529 + 0.98560028 * D)
    q = _normalize_angle_360(280.459 + 0.98564736 * D)
    L = _normalize_angle_360(q + 1.915 * math.sin(_deg2rad(g)) + 0.020 * math.sin(_deg2rad(2 * g)))
    e = 23.439 - 0.00000036 * D

    sin_L = math.sin(_deg2rad(L))
    cos_L = math.cos(_deg2rad(L))
    # Right ascension (same quadrant as L)
    ra = _normalize_angle_360(_rad2deg(math.atan2(math.cos(_deg2rad(e)) * sin_L, cos_L)))

    # Mean minus apparent right ascension, wrapped so the difference stays small
    diff = (q - ra + 180.0) % 360.0 - 180.0
    eqt_minutes = diff / 15.0 * 60.0

    decl = math.asin(math.sin(_deg2rad(e)) * sin_L)
    return decl, eqt_minutes


def solar_declination(jd: float) -> float:
    """Solar declination in radians."""
    return _solar_coordinates(jd)[0]


def equation_of_time(jd: float) -> float:
    """Apparent minus mean solar time, in minutes."""
    return _solar_coordinates(jd)[1]


def solar_noon(location: Location, jd: float) -> float:
    """Solar noon (Dhuhr) in local decimal hours."""
    return 12.0 + location.utc_offset - location.longitude / 15.0 - equation_of_time(jd) / 60.0


def hour_angle(latitude: float, declination: float, target_altitude: float) -> float | None:
    """
    Hour angle (radians) at which the sun stands at `target_altitude` degrees.

    latitude is in degrees, declination in radians. Returns None when the sun
    never reaches that altitude on this day.
    """
    lat_r = _deg2rad(latitude)
    denominator = math.cos(lat_r) * math.cos(declination)
    if abs(denominator) < 1e-12:
        return None
    cos_omega = (math.sin(_deg2rad(target_altitude)) - math.sin(lat_r) * math.sin(declination)) / denominator
    if cos_omega < -1 or cos_omega > 1:
        return None
    return math.acos(cos_omega)


def _horizon_altitude(location: Location) -> float:
    # refraction plus a coarse dip correction for the observer's height
    return -SUNRISE_SUNSET_ANGLE - ALTITUDE_DIP_FACTOR * math.sqrt(max(location.altitude, 0.0))


def _offset_from_noon(location: Location, jd: float, target_altitude: float, sign: int) -> float | None:
    omega = hour_angle(location.latitude, solar_declination(jd), target_altitude)
    if omega is None:
        return None
    return solar_noon(location, jd) + sign * _rad2deg(omega) / 15.0


def sunrise(location: Location, jd: float) -> float | None:
    return _offset_from_noon(location, jd, _horizon_altitude(location), -1)


def sunset(location: Location, jd: float) -> float | None:
    return _offset_from_noon(location, jd, _horizon_altitude(location), 1)


def fajr(location: Location, jd: float, angle: float) -> float | None:
    """Morning twilight: sun `angle` degrees below the horizon."""
    return _offset_from_noon(location, jd, -angle, -1)


def isha_by_angle(location: Location, jd: float, angle: float) -> float | None:
    """Evening twilight: sun `angle` degrees below the horizon."""
    return _offset_from_noon(location, jd, -angle, 1)


def isha_by_delay(location: Location, jd: float, delay_minutes: float) -> float | None:
    """Fixed interval after sunset."""
    set_time = sunset(location, jd)
    if set_time is None:
        return None
    return set_time + delay_minutes / 60.0


def asr(location: Location, jd: float, shadow_factor: int = 1) -> float | None:
    """
    Afternoon time when an object's shadow equals shadow_factor times its
    height plus its noon shadow.
    """
    decl = solar_declination(jd)
    zenith_at_noon = abs(_deg2rad(location.latitude) - decl)
    if zenith_at_noon >= math.pi / 2:
        return None
    alt_rad = math.atan(1.0 / (shadow_factor + math.tan(zenith_at_noon)))
    omega = hour_angle(location.latitude, decl, _rad2deg(alt_rad))
    if omega is None:
        return None
    return solar_noon(location, jd) + _rad2deg(omega) / 15.0


def to_local_time(hours: float | None) -> time | None:
    """Convert decimal hours in [0, 24) to a clock time; anything else is None."""
    if hours is None or math.isnan(hours) or hours < 0 or hours >= 24:
        return None
    seconds = int(hours * 3600)
    if seconds >= 86400:
        return None
    return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
