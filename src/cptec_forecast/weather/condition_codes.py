"""CPTEC weather condition codes."""

from types import MappingProxyType
from typing import Mapping

UNKNOWN_CONDITION = "Não definido"

CONDITION_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "ec": "Encoberto com chuvas isoladas",
    "ci": "Chuvas isoladas",
    "c": "Chuva",
    "in": "Instável",
    "pp": "Possibilidade de pancadas de chuva",
    "cm": "Chuva pela manhã",
    "cn": "Chuva à noite",
    "pt": "Pancadas de chuva à tarde",
    "pm": "Pancadas de chuva pela manhã",
    "np": "Nublado e pancadas de chuva",
    "pc": "Pancadas de chuva",
    "pn": "Parcialmente nublado",
    "cv": "Chuvisco",
    "ch": "Chuvoso",
    "t": "Tempestade",
    "ps": "Predomínio de sol",
    "e": "Encoberto",
    "n": "Nublado",
    "cl": "Céu claro",
    "nv": "Nevoeiro",
    "g": "Geada",
    "ne": "Neve",
    "nd": UNKNOWN_CONDITION,
    "pnt": "Pancadas de chuva à noite",
    "psc": "Possibilidade de chuva",
    "pcm": "Possibilidade de chuva pela manhã",
    "pct": "Possibilidade de chuva à tarde",
    "pcn": "Possibilidade de chuva à noite",
    "npt": "Nublado com pancadas à tarde",
    "npn": "Nublado com pancadas à noite",
    "ncn": "Nublado com possibilidade de chuva à noite",
    "nct": "Nublado com possibilidade de chuva à tarde",
    "ncm": "Nublado com possibilidade de chuva pela manhã",
    "npm": "Nublado com pancadas pela manhã",
    "npp": "Nublado com possibilidade de chuva",
    "vn": "Variação de nebulosidade",
    "ct": "Chuva à tarde",
    "ppn": "Possibilidade de pancadas de chuva à noite",
    "ppt": "Possibilidade de pancadas de chuva à tarde",
    "ppm": "Possibilidade de pancadas de chuva pela manhã",
})


def describe_condition(code: str) -> str:
    """Description for a condition code; unknown codes are not an error."""
    return CONDITION_DESCRIPTIONS.get(code.strip().lower(), UNKNOWN_CONDITION)
