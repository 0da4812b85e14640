"""
User preferences for prayer time calculation.
"""

from dataclasses import dataclass, field

from calculation_methods import AsrConvention, CalculationMethod, HighLatitudeAdjustment
from daily_schedule import Prayer
from location import Location


@dataclass(frozen=True)
class PrayerTimeOffsets:
    """Minutes added to each computed time."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def get(self, prayer: Prayer | str) -> int:
        try:
            prayer = Prayer(prayer if isinstance(prayer, Prayer) else str(prayer).strip().lower())
        except ValueError:
            return 0
        return getattr(self, prayer.value)


@dataclass(frozen=True)
class PrayerSettings:
    calculation_method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE
    asr_convention: AsrConvention = AsrConvention.STANDARD
    high_latitude_adjustment: HighLatitudeAdjustment = HighLatitudeAdjustment.NONE
    custom_fajr_angle: float | None = None
    custom_isha_angle: float | None = None
    custom_isha_delay: int | None = None
    offsets: PrayerTimeOffsets = field(default_factory=PrayerTimeOffsets)
    location: Location | None = None

    def effective_fajr_angle(self) -> float:
        if self.custom_fajr_angle is not None:
            return self.custom_fajr_angle
        return self.calculation_method.fajr_angle

    def effective_isha_angle(self) -> float | None:
        if self.custom_isha_angle is not None:
            return self.custom_isha_angle
        # a delay override switches an angle method to delay mode
        if self.custom_isha_delay is not None:
            return None
        return self.calculation_method.isha_angle

    def effective_isha_delay(self) -> int | None:
        if self.custom_isha_delay is not None:
            return self.custom_isha_delay
        return self.calculation_method.isha_delay

    def offset_for(self, prayer: Prayer | str) -> int:
        return self.offsets.get(prayer)
