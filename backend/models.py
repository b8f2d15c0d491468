#file: backend/models.py

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

POLLUTANT_KINDS = ("pm25", "pm10", "ozone", "no2")


class StateIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=2, max_length=2, description="Two-letter postal abbreviation")
    name: str = Field(..., description="Display name of the state")


class GeoLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    postal_code: str = Field(..., description="Representative zip code used for provider queries")
    latitude: float
    longitude: float


class CamelModel(BaseModel):
    """Models exchanged with the UI: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class PollutantReading(CamelModel):
    aqi: int = Field(..., ge=0, description="Provider-computed AQI for this pollutant")
    category: str = Field(..., description="Human-readable category name")
    category_number: int = Field(..., ge=1, le=6, description="Provider severity tier 1-6")


class WeatherSnapshot(CamelModel):
    temperature_celsius: float
    humidity_percent: float
    wind_speed_kph: float


class AqiSummary(CamelModel):
    aqi: int = Field(..., ge=0, description="Highest AQI across the reported pollutants")
    category: str
    color: str = Field(..., description="Hex color of the AQI tier")


def empty_pollutants() -> Dict[str, Optional[PollutantReading]]:
    return {kind: None for kind in POLLUTANT_KINDS}


class PollutantReport(CamelModel):
    """Outcome of a single air-quality provider call."""
    available: bool
    message: Optional[str] = None
    reporting_area: Optional[str] = None
    date_observed: Optional[str] = None
    hour_observed: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    pollutants: Dict[str, Optional[PollutantReading]] = Field(default_factory=empty_pollutants)

    @classmethod
    def unavailable(cls, message: str) -> "PollutantReport":
        return cls(available=False, message=message)


class AirQualityRecord(CamelModel):
    available: bool
    state_code: Optional[str] = None
    reporting_area: Optional[str] = None
    date_observed: Optional[str] = None
    hour_observed: Optional[int] = None
    pollutants: Optional[Dict[str, Optional[PollutantReading]]] = None
    weather: Optional[WeatherSnapshot] = None
    summary: Optional[AqiSummary] = None
    message: Optional[str] = None
    error: Optional[str] = Field(None, description="Set only when an unexpected failure produced this record")

    @classmethod
    def unavailable(cls, message: str, error: Optional[str] = None) -> "AirQualityRecord":
        return cls(available=False, message=message, error=error)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the UI; unavailable records carry only the status and message."""
        if not self.available :
            payload = {"available": False, "message": self.message}
            if self.error is not None:
                payload["error"] = self.error
            return payload
        return self.model_dump(by_alias=True, exclude={"message", "error"}, mode="json")


class PhotoSet(BaseModel):
    photos: List[str] = Field(default_factory=list, max_length=3)


class UsaOverview(CamelModel):
    available: bool
    aqi: Optional[int] = None
    category: Optional[str] = None
    color: Optional[str] = None
    pm25: Optional[int] = Field(None, description="Average PM2.5 AQI across sampled states")
    pm10: Optional[int] = Field(None, description="Average PM10 AQI across sampled states")
    states_sampled: List[str] = Field(default_factory=list)
    generated_at: Optional[str] = None
    message: Optional[str] = None


class AirQualityRequest(CamelModel):
    state_code: Optional[str] = None


class PhotoRequest(CamelModel):
    state_name: Optional[str] = None
    state_code: Optional[str] = None
