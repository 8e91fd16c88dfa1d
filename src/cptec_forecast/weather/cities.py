"""City directory lookup."""

import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from cptec_forecast.errors import CityNotFoundError
from cptec_forecast.weather.client import CptecClient
from cptec_forecast.weather.models import CityRecord
from cptec_forecast.weather.text import strip_accents
from cptec_forecast.weather.xml_decoder import XmlDecodeError, as_list

logger = logging.getLogger(__name__)


def _city_from_entry(entry: Dict[str, Any]) -> CityRecord:
    """Build a CityRecord from one decoded ``cidade`` element."""
    return CityRecord(
        internal_code=entry["id"],
        name=str(entry["nome"]),
        region=str(entry["uf"]).strip().upper(),
    )


async def lookup_city(client: CptecClient, display_name: str) -> CityRecord:
    """Find the CPTEC city record for a place name.

    The directory answers with one ``cidade`` element or several; the
    first one is used.

    Args:
        client: CPTEC client
        display_name: Place name, accents allowed

    Returns:
        CityRecord of the first match

    Raises:
        CityNotFoundError: If the directory call fails or has no matches
        httpx.TimeoutException: If the directory does not answer in time
    """
    query = strip_accents(display_name)
    not_found = CityNotFoundError(f"Cidade '{display_name}' não encontrada no diretório de previsão.")

    try:
        document = await client.get_city_list(query)
    except httpx.TimeoutException:
        raise
    except (httpx.HTTPError, XmlDecodeError) as e:
        raise not_found from e

    cities = document.get("cidades") or {}
    entries = as_list(cities.get("cidade")) if isinstance(cities, dict) else []
    if not entries:
        logger.info(f"No directory entries for '{query}'")
        raise not_found

    try:
        city = _city_from_entry(entries[0])
    except (KeyError, TypeError, ValidationError) as e:
        logger.error(f"Malformed city directory entry for '{query}': {e}")
        raise not_found from e

    logger.info(f"Resolved '{display_name}' to city code {city.internal_code} ({city.name} - {city.region})")
    return city
