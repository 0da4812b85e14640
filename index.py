import logging
from datetime import datetime, time, timedelta
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel

from app_config import CFG
from calculation_methods import AsrConvention, CalculationMethod, HighLatitudeAdjustment
from location import Location
from prayer_settings import PrayerSettings, PrayerTimeOffsets
from prayer_times import PrayerTimesError, calculate_prayer_times, get_prayer_times

logging.basicConfig(level=CFG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Prayer Times API",
    description="API service for calculating Islamic prayer times",
    version="1.0.0"
)


class PrayerRow(BaseModel):
    name: str
    time: str
    isNext: bool
    isCurrent: bool


class NextPrayerResponse(BaseModel):
    date: str
    location: str
    next: Optional[str]
    time: Optional[str]
    remaining: str
    prayers: List[PrayerRow]


@app.get("/")
def root():
    return {
        "service": "Prayer Times API",
        "status": "online",
        "endpoints": {
            "/api/timesForGPS": "Get prayer times for GPS coordinates",
            "/api/nextPrayer": "Get the next prayer and time remaining",
            "/health": "Health check",
        }
    }


@app.get("/health")
def health_check():
    return {"status": "ok"}


def get_settings(
    calculationMethod: Optional[str] = None,
    countryCode: Optional[str] = None,
    asr: Optional[str] = None,
    highLatitude: Optional[str] = None,
    fajrAngle: Optional[float] = None,
    ishaAngle: Optional[float] = None,
    ishaDelay: Optional[int] = None,
    fajrOffset: int = 0,
    sunriseOffset: int = 0,
    dhuhrOffset: int = 0,
    asrOffset: int = 0,
    maghribOffset: int = 0,
    ishaOffset: int = 0,
) -> PrayerSettings:
    # An explicit method wins; otherwise derive one from the country
    try:
        if calculationMethod:
            method = CalculationMethod.from_name(calculationMethod)
        elif countryCode:
            method = CalculationMethod.for_country(countryCode)
        else:
            method = CalculationMethod.from_name(CFG.default_method)
        asr_convention = AsrConvention.from_name(asr or CFG.default_asr)
        high_latitude = HighLatitudeAdjustment.from_name(highLatitude or CFG.default_high_latitude)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PrayerSettings(
        calculation_method=method,
        asr_convention=asr_convention,
        high_latitude_adjustment=high_latitude,
        custom_fajr_angle=fajrAngle,
        custom_isha_angle=ishaAngle,
        custom_isha_delay=ishaDelay,
        offsets=PrayerTimeOffsets(
            fajr=fajrOffset,
            sunrise=sunriseOffset,
            dhuhr=dhuhrOffset,
            asr=asrOffset,
            maghrib=maghribOffset,
            isha=ishaOffset,
        ),
    )


def _parse_date(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD")


def _unprocessable(e: PrayerTimesError) -> HTTPException:
    logger.warning("prayer time computation failed: %s", e)
    return HTTPException(status_code=422, detail={"code": e.code, "message": e.message})


@app.get("/api/timesForGPS")
def get_times_for_gps(
    lat: float,
    lng: float,
    date: str,
    days: int = Query(1, ge=1),
    timezoneOffset: int = 0, # Minutes, e.g., 180
    altitude: float = 0.0,
    settings: PrayerSettings = Depends(get_settings),
):
    if days > CFG.max_days:
        raise HTTPException(status_code=400, detail=f"days must be at most {CFG.max_days}")
    start_date = _parse_date(date)
    logger.info("times for %.4f,%.4f from %s (%d days, %s)", lat, lng, date, days, settings.calculation_method.key)

    response_times = {}

    for i in range(days):
        current_day = start_date + timedelta(days=i)
        date_key = current_day.strftime("%Y-%m-%d")

        try:
            # get_prayer_times takes the JavaScript sign convention (UTC - local)
            calc = get_prayer_times(lat, lng, date_key, -timezoneOffset, settings, altitude)
        except PrayerTimesError as e:
            raise _unprocessable(e)

        # [0]: Fajr, [1]: Sunrise, [2]: Dhuhr, [3]: Asr, [4]: Maghrib, [5]: Isha
        response_times[date_key] = [
            calc['fajr'],
            calc['sunrise'],
            calc['dhuhr'],
            calc['asr'],
            calc['maghrib'],
            calc['isha'],
        ]

    return {"times": response_times}


@app.get("/api/nextPrayer", response_model=NextPrayerResponse)
def get_next_prayer(
    lat: float,
    lng: float,
    date: str,
    now: str,
    timezoneOffset: int = 0,
    altitude: float = 0.0,
    settings: PrayerSettings = Depends(get_settings),
):
    day = _parse_date(date).date()
    try:
        current = time.fromisoformat(now)
    except ValueError:
        raise HTTPException(status_code=400, detail="now must be HH:MM or HH:MM:SS")

    location = Location.from_minutes(lat, lng, timezoneOffset, altitude=altitude)
    try:
        schedule = calculate_prayer_times(day, location, settings)
    except PrayerTimesError as e:
        raise _unprocessable(e)

    upcoming = schedule.next_prayer(current)
    return NextPrayerResponse(
        date=day.isoformat(),
        location=location.display_name,
        next=upcoming.name if upcoming else None,
        time=upcoming.time.strftime("%H:%M") if upcoming else None,
        remaining=schedule.countdown(current),
        prayers=[
            PrayerRow(name=row.name, time=row.time.strftime("%H:%M"), isNext=row.is_next, isCurrent=row.is_current)
            for row in schedule.prayers(current)
        ],
    )

# To run this API:
# uvicorn index:app --reload --port 8000
