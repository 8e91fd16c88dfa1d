"""API endpoints for the CPTEC forecast service."""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from cptec_forecast.config import CPTEC_BASE_URL
from cptec_forecast.errors import InvalidInputError
from cptec_forecast.weather.models import ErrorResponse, LocationQuery, SuccessResponse
from cptec_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["weather"])


def get_weather_service() -> WeatherService:
    """Build a fresh weather service for one request."""
    return WeatherService()


@router.get(
    "/",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def get_weather_forecast(
    name: Optional[str] = Query(
        None,
        description="Place name (alternative to lat/lon, not both)"
    ),
    lat: Optional[float] = Query(
        None,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees (use with lon)"
    ),
    lon: Optional[float] = Query(
        None,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees (use with lat)"
    )
) -> SuccessResponse:
    """Get the forecast and current conditions for a place.

    Failures are raised as ForecastPipelineError and rendered into the
    error envelope by the application's exception handler.
    """
    query = validate_location_query(name, lat, lon)

    weather_service = get_weather_service()
    async with weather_service:
        result = await weather_service.aggregate(query)

    logger.info(f"Returning forecast with {len(result.forecast)} days for {result.location_label}")
    return SuccessResponse(data=result)


def validate_location_query(
    name: Optional[str],
    lat: Optional[float],
    lon: Optional[float]
) -> LocationQuery:
    """
    Validate request parameters into a LocationQuery.

    Args:
        name: Place name
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        LocationQuery with exactly one form populated

    Raises:
        InvalidInputError: If validation fails
    """
    has_name = name is not None and name.strip() != ""
    has_coordinates = lat is not None or lon is not None

    if has_coordinates and has_name:
        raise InvalidInputError(
            "Informe as coordenadas ou o nome do local, não ambos."
        )

    if has_coordinates and (lat is None or lon is None):
        raise InvalidInputError(
            "Latitude (lat) e Longitude (lon) são obrigatórias."
        )

    if not has_coordinates and not has_name:
        raise InvalidInputError()

    if has_name:
        return LocationQuery(name=name.strip())
    return LocationQuery(lat=lat, lon=lon)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "cptec-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including features and data sources
    """
    return {
        "service": "CPTEC Forecast Service",
        "version": "0.1.0",
        "features": [
            "Multi-day forecast by place name or coordinates",
            "Current conditions at the state capital's station"
        ],
        "data_source": CPTEC_BASE_URL,
        "geocoding": "OpenStreetMap Nominatim"
    }
