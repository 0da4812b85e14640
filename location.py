from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A point on Earth with its local UTC offset (hours) and altitude (meters)."""

    latitude: float
    longitude: float
    utc_offset: float
    altitude: float = 0.0
    city: str = ""
    country: str = ""

    @classmethod
    def from_minutes(cls, latitude: float, longitude: float, offset_minutes: float, **kwargs) -> "Location":
        """Build a Location from a UTC offset in minutes east of Greenwich (e.g. 180 for UTC+3)."""
        return cls(latitude, longitude, offset_minutes / 60.0, **kwargs)

    def is_valid(self) -> bool:
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    @property
    def display_name(self) -> str:
        if self.city and self.country:
            return f"{self.city}, {self.country}"
        if self.city:
            return self.city
        if self.country:
            return self.country
        return f"{self.latitude:.4f}, {self.longitude:.4f}"
