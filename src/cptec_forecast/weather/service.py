"""Weather service: joins location, forecast and current conditions."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

from cptec_forecast.errors import ForecastPipelineError, classify_error
from cptec_forecast.weather.cities import lookup_city
from cptec_forecast.weather.client import CptecClient
from cptec_forecast.weather.conditions import fetch_current_conditions
from cptec_forecast.weather.forecast import fetch_forecast
from cptec_forecast.weather.geocoding import LocationResolver
from cptec_forecast.weather.models import (
    AggregatedResult, CityRecord, CurrentConditions, ForecastFeed,
    LocationQuery
)
from cptec_forecast.weather.stations import REGION_STATIONS

logger = logging.getLogger(__name__)


def location_label(city: CityRecord) -> str:
    """Label shown to the user, e.g. 'Brasília - DF'."""
    return f"{city.name} - {city.region}"


class WeatherService:
    """Service for assembling a forecast for one location."""

    def __init__(
        self,
        client: Optional[CptecClient] = None,
        resolver: Optional[LocationResolver] = None,
        stations: Mapping[str, str] = REGION_STATIONS
    ):
        """Initialize the weather service.

        Args:
            client: CPTEC client instance (creates default if None)
            resolver: Location resolver instance (creates default if None)
            stations: Region to observation-station mapping
        """
        self.client = client or CptecClient()
        self.resolver = resolver or LocationResolver()
        self.stations = stations

    async def aggregate(self, query: LocationQuery) -> AggregatedResult:
        """Get the forecast and current conditions for a location.

        The forecast decides success or failure; current conditions only
        decide how complete the result is.

        Args:
            query: Place name or coordinate pair

        Returns:
            AggregatedResult for the matched city

        Raises:
            ForecastPipelineError: Exactly one classified failure
        """
        try:
            return await self._aggregate(query)
        except ForecastPipelineError as e:
            logger.error(f"{e.kind.value}: {e.message}")
            raise
        except Exception as e:
            raise classify_error(e) from e

    async def _aggregate(self, query: LocationQuery) -> AggregatedResult:
        """Run the pipeline; errors are classified by the caller."""
        place = await self.resolver.resolve(query)
        resolved_at = datetime.now(timezone.utc).isoformat()

        city = await lookup_city(self.client, place.display_name)

        # Fork-join: both calls always run to completion before inspection
        forecast_outcome, conditions_outcome = await asyncio.gather(
            fetch_forecast(self.client, city.internal_code),
            fetch_current_conditions(self.client, city.region, self.stations),
            return_exceptions=True
        )

        if isinstance(forecast_outcome, ForecastPipelineError):
            raise forecast_outcome
        if isinstance(forecast_outcome, BaseException):
            raise classify_error(forecast_outcome) from forecast_outcome
        feed: ForecastFeed = forecast_outcome

        conditions = self._conditions_or_placeholder(conditions_outcome)

        result = AggregatedResult(
            location_label=location_label(city),
            generated_at=feed.updated_at or resolved_at,
            forecast=feed.days,
            current_conditions=conditions,
        )
        logger.info(f"Aggregated {len(result.forecast)} forecast days for {result.location_label}")
        return result

    def _conditions_or_placeholder(self, outcome) -> CurrentConditions:
        """Use the fetched conditions, or the all-sentinel record if there are none."""
        if isinstance(outcome, CurrentConditions):
            return outcome
        if isinstance(outcome, BaseException):
            logger.warning(f"Current conditions fetch raised {outcome!r}, using placeholder")
        return CurrentConditions.not_available()

    async def aclose(self):
        """Close the CPTEC client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing CPTEC client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
