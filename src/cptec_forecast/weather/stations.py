"""Region to observation-station mapping.

The current-conditions feed reports one METAR station per state capital,
keyed by the airport's ICAO code. Cities are matched to the capital of
their federative unit.
"""

from types import MappingProxyType
from typing import Mapping, Optional

REGION_STATIONS: Mapping[str, str] = MappingProxyType({
    "AC": "SBRB",  # Rio Branco
    "AL": "SBMO",  # Maceió
    "AM": "SBEG",  # Manaus
    "AP": "SBMQ",  # Macapá
    "BA": "SBSV",  # Salvador
    "CE": "SBFZ",  # Fortaleza
    "DF": "SBBR",  # Brasília
    "ES": "SBVT",  # Vitória
    "GO": "SBGO",  # Goiânia
    "MA": "SBSL",  # São Luís
    "MG": "SBBH",  # Belo Horizonte
    "MS": "SBCG",  # Campo Grande
    "MT": "SBCY",  # Cuiabá
    "PA": "SBBE",  # Belém
    "PB": "SBJP",  # João Pessoa
    "PE": "SBRF",  # Recife
    "PI": "SBTE",  # Teresina
    "PR": "SBCT",  # Curitiba
    "RJ": "SBRJ",  # Rio de Janeiro
    "RN": "SBNT",  # Natal
    "RO": "SBPV",  # Porto Velho
    "RR": "SBBV",  # Boa Vista
    "RS": "SBPA",  # Porto Alegre
    "SC": "SBFL",  # Florianópolis
    "SE": "SBAR",  # Aracaju
    "SP": "SBSP",  # São Paulo
    "TO": "SBPJ",  # Palmas
})


def station_for_region(region: str, stations: Mapping[str, str] = REGION_STATIONS) -> Optional[str]:
    """Return the station code for a region, or None if it has none."""
    return stations.get(region.strip().upper())
