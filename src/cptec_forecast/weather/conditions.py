"""Current conditions at the state capital's station.

Observations only enrich the forecast, so nothing here raises: every
failure is logged and reported as None.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from cptec_forecast.config import NOT_AVAILABLE
from cptec_forecast.weather.client import CptecClient
from cptec_forecast.weather.models import CurrentConditions
from cptec_forecast.weather.stations import REGION_STATIONS, station_for_region
from cptec_forecast.weather.xml_decoder import XmlDecodeError, as_list

logger = logging.getLogger(__name__)

# CurrentConditions field -> METAR element
METAR_FIELDS = {
    "temperature": "temperatura",
    "humidity": "umidade",
    "pressure": "pressao",
    "wind_speed": "vento_int",
    "wind_direction_degrees": "vento_dir",
    "visibility": "visibilidade",
    "description": "tempo_desc",
}


def _conditions_from_metar(station: str, metar: Dict[str, Any]) -> CurrentConditions:
    """Build CurrentConditions from one decoded ``metar`` element."""
    values = {}
    for field, tag in METAR_FIELDS.items():
        value = metar.get(tag)
        values[field] = NOT_AVAILABLE if value is None else value
    values["description"] = str(values["description"])
    return CurrentConditions(station_code=station, **values)


def find_station(document: Dict[str, Any], station: str) -> Optional[Dict[str, Any]]:
    """Linear search of a decoded ``capitais`` document for a station code."""
    capitals = document.get("capitais")
    if not isinstance(capitals, dict):
        return None
    for metar in as_list(capitals.get("metar")):
        if isinstance(metar, dict) and str(metar.get("codigo", "")).strip().upper() == station:
            return metar
    return None


async def fetch_current_conditions(
    client: CptecClient,
    region: str,
    stations: Mapping[str, str] = REGION_STATIONS
) -> Optional[CurrentConditions]:
    """Fetch current conditions for a region's capital.

    Args:
        client: CPTEC client
        region: Federative unit code of the city
        stations: Region to station-code mapping

    Returns:
        CurrentConditions, or None if unavailable for any reason
    """
    station = station_for_region(region, stations)
    if station is None:
        logger.warning(f"No observation station mapped for region '{region}'")
        return None

    try:
        document = await client.get_current_conditions()
    except (httpx.HTTPError, XmlDecodeError) as e:
        logger.warning(f"Current conditions unavailable: {e!r}")
        return None

    metar = find_station(document, station)
    if metar is None:
        logger.warning(f"Station {station} not present in current conditions feed")
        return None

    try:
        return _conditions_from_metar(station, metar)
    except ValueError as e:
        logger.warning(f"Malformed observation for station {station}: {e}")
        return None
