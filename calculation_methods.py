"""
Calculation conventions: twilight angles per authority, Asr shadow factors and
high-latitude adjustment rules.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MethodParameters:
    key: str
    display_name: str
    fajr_angle: float
    isha_angle: float | None = None
    isha_delay: int | None = None  # minutes after sunset
    maghrib_offset: int = 0
    description: str = ""

    def __post_init__(self):
        if (self.isha_angle is None) == (self.isha_delay is None):
            raise ValueError(f"{self.key}: exactly one of isha_angle / isha_delay must be set")


class CalculationMethod(Enum):
    MUSLIM_WORLD_LEAGUE = MethodParameters(
        "MuslimWorldLeague",
        "Muslim World League (MWL)",
        fajr_angle=18.0,
        isha_angle=17.0,
        description="Used in Europe, Far East, parts of US",
    )
    UMM_AL_QURA = MethodParameters(
        "UmmAlQura",
        "Umm al-Qura (Makkah)",
        fajr_angle=18.5,
        isha_delay=90,  # 120 in Ramadan
        description="Used in Saudi Arabia",
    )
    EGYPTIAN_AUTHORITY = MethodParameters(
        "EgyptianAuthority",
        "Egyptian General Authority",
        fajr_angle=19.5,
        isha_angle=17.5,
        description="Used in Egypt, Syria, Iraq, Lebanon, Malaysia, parts of US",
    )
    UNIVERSITY_OF_ISLAMIC_SCIENCES = MethodParameters(
        "UniversityOfIslamicSciences",
        "University of Islamic Sciences (Karachi)",
        fajr_angle=18.0,
        isha_angle=18.0,
        description="Used in Pakistan, Bangladesh, India, Afghanistan, parts of Europe",
    )
    ISNA = MethodParameters(
        "ISNA",
        "Islamic Society of North America (ISNA)",
        fajr_angle=15.0,
        isha_angle=15.0,
        description="Used in North America (US, Canada, Mexico)",
    )
    MUIS = MethodParameters(
        "MUIS",
        "Majlis Ugama Islam Singapura (MUIS)",
        fajr_angle=20.0,
        isha_angle=18.0,
        description="Used in Singapore, Malaysia, Brunei",
    )

    @property
    def key(self) -> str:
        return self.value.key

    @property
    def display_name(self) -> str:
        return self.value.display_name

    @property
    def fajr_angle(self) -> float:
        return self.value.fajr_angle

    @property
    def isha_angle(self) -> float | None:
        return self.value.isha_angle

    @property
    def isha_delay(self) -> int | None:
        return self.value.isha_delay

    @property
    def maghrib_offset(self) -> int:
        return self.value.maghrib_offset

    @property
    def description(self) -> str:
        return self.value.description

    @classmethod
    def from_name(cls, name: str) -> "CalculationMethod":
        """Accepts the catalog key ("UmmAlQura") or member name ("UMM_AL_QURA")."""
        wanted = name.strip().lower()
        for method in cls:
            if wanted in (method.key.lower(), method.name.lower()):
                return method
        raise ValueError(f"unknown calculation method: {name!r}")

    @classmethod
    def for_country(cls, country_code: str | None) -> "CalculationMethod":
        return _COUNTRY_METHODS.get((country_code or "").strip().upper(), cls.MUSLIM_WORLD_LEAGUE)


_COUNTRY_METHODS = {
    **dict.fromkeys(("SA", "AE", "KW", "QA", "BH", "OM"), CalculationMethod.UMM_AL_QURA),
    **dict.fromkeys(("EG", "SY", "IQ", "LB", "JO"), CalculationMethod.EGYPTIAN_AUTHORITY),
    **dict.fromkeys(("PK", "BD", "IN", "AF"), CalculationMethod.UNIVERSITY_OF_ISLAMIC_SCIENCES),
    **dict.fromkeys(("US", "CA", "MX"), CalculationMethod.ISNA),
    **dict.fromkeys(("SG", "MY", "BN"), CalculationMethod.MUIS),
}


class AsrConvention(Enum):
    STANDARD = 1  # Shafi'i, Maliki, Hanbali
    HANAFI = 2

    @property
    def shadow_factor(self) -> int:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "AsrConvention":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown asr convention: {name!r}") from None


class HighLatitudeAdjustment(Enum):
    NONE = "none"
    MIDDLE_OF_NIGHT = "middle_of_night"
    ONE_SEVENTH_OF_NIGHT = "one_seventh_of_night"
    ANGLE_BASED = "angle_based"
    # No nearest-latitude table exists; treated like NONE.
    NEAREST_LATITUDE = "nearest_latitude"

    @classmethod
    def from_name(cls, name: str) -> "HighLatitudeAdjustment":
        wanted = name.strip().lower()
        for rule in cls:
            if wanted in (rule.value, rule.name.lower()):
                return rule
        raise ValueError(f"unknown high latitude adjustment: {name!r}")
