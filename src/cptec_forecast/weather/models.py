"""Data models for the CPTEC forecast service."""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from cptec_forecast.config import CONDITIONS_UNAVAILABLE_TEXT, NOT_AVAILABLE

# A reading or the NOT_AVAILABLE sentinel
Reading = Union[float, str]


class LocationQuery(BaseModel):
    """Inbound location: a place name or a coordinate pair."""
    name: Optional[str] = Field(None, description="Place name")
    lat: Optional[float] = Field(None, ge=-90, le=90, description="Latitude in decimal degrees")
    lon: Optional[float] = Field(None, ge=-180, le=180, description="Longitude in decimal degrees")

    @property
    def has_name(self) -> bool:
        """True if a non-blank place name was given."""
        return bool(self.name and self.name.strip())

    @property
    def has_coordinates(self) -> bool:
        """True if both latitude and longitude were given."""
        return self.lat is not None and self.lon is not None


class ResolvedPlace(BaseModel):
    """Human-readable place name used to search the city directory."""
    display_name: str = Field(..., description="Place name as shown to the user")


class CityRecord(BaseModel):
    """City directory entry."""
    internal_code: int = Field(..., description="Upstream city code, only meaningful to the forecast feed")
    name: str = Field(..., description="City name")
    region: str = Field(..., pattern=r"^[A-Z]{2}$", description="Federative unit code")


class DailyForecast(BaseModel):
    """One forecast day."""
    day: int = Field(..., ge=1, description="1-based day index in feed order")
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    condition_code: str = Field(..., description="Upstream condition token")
    condition_description: str = Field(..., description="Condition in plain words")
    temp_min: float = Field(..., description="Minimum temperature in Celsius")
    temp_max: float = Field(..., description="Maximum temperature in Celsius")
    uv_index: float = Field(..., description="Ultraviolet index")


class ForecastFeed(BaseModel):
    """Decoded forecast feed."""
    days: List[DailyForecast] = Field(..., min_length=1)
    updated_at: Optional[str] = Field(None, description="Feed-level last update")


class CurrentConditions(BaseModel):
    """Latest observation at the capital's station."""
    station_code: Reading = Field(NOT_AVAILABLE, description="Observation station identifier")
    temperature: Reading = Field(NOT_AVAILABLE, description="Air temperature in Celsius")
    humidity: Reading = Field(NOT_AVAILABLE, description="Relative humidity in percent")
    pressure: Reading = Field(NOT_AVAILABLE, description="Pressure in hPa")
    wind_speed: Reading = Field(NOT_AVAILABLE, description="Wind speed in km/h")
    wind_direction_degrees: Reading = Field(NOT_AVAILABLE, description="Wind direction in degrees")
    visibility: Reading = Field(NOT_AVAILABLE, description="Visibility in metres")
    description: str = Field(NOT_AVAILABLE, description="Weather in plain words")

    @classmethod
    def not_available(cls) -> "CurrentConditions":
        """Degraded record used when no observation could be matched."""
        return cls(description=CONDITIONS_UNAVAILABLE_TEXT)


class AggregatedResult(BaseModel):
    """Forecast and current conditions for one place."""
    location_label: str = Field(..., description="City name and region, e.g. 'Brasília - DF'")
    generated_at: str = Field(..., description="Forecast update time, ISO-8601")
    forecast: List[DailyForecast] = Field(..., description="Daily forecasts in day order")
    current_conditions: CurrentConditions = Field(..., description="Current conditions or sentinels")


class SuccessResponse(BaseModel):
    """Success envelope."""
    success: Literal[True] = True
    data: AggregatedResult


class ErrorResponse(BaseModel):
    """Error envelope."""
    success: Literal[False] = False
    message: str = Field(..., description="Error message")
