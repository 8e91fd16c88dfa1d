"""Location resolution: place names pass through, coordinates are reverse geocoded."""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from cptec_forecast.config import GEOCODING_LANGUAGE, GEOCODING_USER_AGENT
from cptec_forecast.errors import (
    InvalidInputError,
    LocationNotFoundError,
    UpstreamTransportError,
)
from cptec_forecast.weather.models import LocationQuery, ResolvedPlace

logger = logging.getLogger(__name__)

# Nominatim address fields, most to least preferred
PLACE_FIELDS: Tuple[str, ...] = ("city", "town", "village", "suburb", "neighbourhood")


def pick_place_name(address: Dict[str, Any]) -> Optional[str]:
    """Return the first non-empty place-granularity field of an address."""
    for field in PLACE_FIELDS:
        value = address.get(field)
        if value:
            return value
    return None


class LocationResolver:
    """Turns a LocationQuery into a place name for the city directory."""

    def __init__(self, geolocator: Optional[Nominatim] = None):
        """Initialize the resolver.

        Args:
            geolocator: geopy geocoder with a ``reverse`` method (creates
                a Nominatim instance if None)
        """
        self.geolocator = geolocator or Nominatim(user_agent=GEOCODING_USER_AGENT)

    async def resolve(self, query: LocationQuery) -> ResolvedPlace:
        """Resolve a query to a display name.

        Args:
            query: Place name or coordinate pair

        Returns:
            ResolvedPlace with the name to search for and display

        Raises:
            InvalidInputError: Unless exactly one form of query is populated
            LocationNotFoundError: If reverse geocoding fails or yields no place name
            UpstreamTransportError: If the geocoding service times out
        """
        if query.has_name and (query.lat is not None or query.lon is not None):
            raise InvalidInputError("Informe as coordenadas ou o nome do local, não ambos.")

        if query.has_name:
            return ResolvedPlace(display_name=query.name.strip())

        if not query.has_coordinates:
            raise InvalidInputError()

        name = await self.reverse_geocode(query.lat, query.lon)
        return ResolvedPlace(display_name=name)

    async def reverse_geocode(self, lat: float, lon: float) -> str:
        """Convert coordinates to a place name.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Place name from the first available address field
        """
        logger.info(f"Reverse geocoding coordinates: ({lat}, {lon})")
        try:
            # geopy is blocking, keep it off the event loop
            location = await asyncio.to_thread(
                self.geolocator.reverse,
                (lat, lon),
                exactly_one=True,
                language=GEOCODING_LANGUAGE,
                addressdetails=True,
            )
        except GeocoderTimedOut as e:
            logger.error(f"Reverse geocoding timed out for ({lat}, {lon}): {e}")
            raise UpstreamTransportError("Serviço de geocodificação reversa não respondeu a tempo.") from e
        except GeocoderServiceError as e:
            logger.error(f"Reverse geocoding failed for ({lat}, {lon}): {e}")
            raise LocationNotFoundError() from e

        address = (location.raw or {}).get("address") if location else None
        name = pick_place_name(address or {})
        if not name:
            logger.info(f"No place name found for coordinates ({lat}, {lon})")
            raise LocationNotFoundError()

        logger.info(f"Reverse geocoded ({lat}, {lon}) to '{name}'")
        return name
