"""Per-city forecast feed."""

import logging
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from cptec_forecast.errors import ForecastUnavailableError
from cptec_forecast.weather.client import CptecClient
from cptec_forecast.weather.condition_codes import describe_condition
from cptec_forecast.weather.models import DailyForecast, ForecastFeed
from cptec_forecast.weather.xml_decoder import XmlDecodeError, as_list

logger = logging.getLogger(__name__)


def _daily_forecast(day: int, entry: Dict[str, Any]) -> DailyForecast:
    """Build a DailyForecast from one decoded ``previsao`` element."""
    code = str(entry["tempo"])
    return DailyForecast(
        day=day,
        date=str(entry["dia"]),
        condition_code=code,
        condition_description=describe_condition(code),
        temp_min=entry["minima"],
        temp_max=entry["maxima"],
        uv_index=entry["iuv"],
    )


def parse_forecast_document(document: Dict[str, Any]) -> ForecastFeed:
    """Convert a decoded forecast document into a ForecastFeed.

    Raises:
        ForecastUnavailableError: If there are no days or any day is malformed
    """
    city = document.get("cidade")
    if not isinstance(city, dict):
        raise ForecastUnavailableError()

    entries = as_list(city.get("previsao"))
    if not entries:
        raise ForecastUnavailableError()

    try:
        days: List[DailyForecast] = [
            _daily_forecast(index, entry) for index, entry in enumerate(entries, start=1)
        ]
    except (KeyError, TypeError, ValidationError) as e:
        logger.error(f"Malformed forecast day: {e}")
        raise ForecastUnavailableError() from e

    updated_at = city.get("atualizacao")
    return ForecastFeed(days=days, updated_at=str(updated_at) if updated_at is not None else None)


async def fetch_forecast(client: CptecClient, city_code: int) -> ForecastFeed:
    """Fetch and decode the forecast for a city code.

    Args:
        client: CPTEC client
        city_code: CityRecord.internal_code

    Returns:
        ForecastFeed with one entry per day in feed order

    Raises:
        ForecastUnavailableError: If the feed fails or has no usable days
        httpx.TimeoutException: If the feed does not answer in time
    """
    try:
        document = await client.get_forecast(city_code)
    except httpx.TimeoutException:
        raise
    except (httpx.HTTPError, XmlDecodeError) as e:
        raise ForecastUnavailableError() from e

    feed = parse_forecast_document(document)
    logger.info(f"Decoded {len(feed.days)} forecast days for city code {city_code}")
    return feed
