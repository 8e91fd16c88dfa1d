"""Configuration settings for the CPTEC forecast service."""

import os
from typing import Final, Optional
from dotenv import load_dotenv

load_dotenv()

# API Configuration
CPTEC_BASE_URL: Final[str] = os.getenv("CPTEC_BASE_URL", "http://servicos.cptec.inpe.br/XML")
USER_AGENT: Final[str] = "CptecForecastService/0.1 (user@example.com)"

# Reverse geocoding (Nominatim)
GEOCODING_USER_AGENT: Final[str] = os.getenv("GEOCODING_USER_AGENT", "cptec-forecast-service")
GEOCODING_LANGUAGE: Final[str] = os.getenv("GEOCODING_LANGUAGE", "pt-BR")

# Unset means the HTTP client's own default timeout applies
_timeout = os.getenv("HTTP_TIMEOUT_SECONDS")
HTTP_TIMEOUT_SECONDS: Optional[float] = float(_timeout) if _timeout else None

# Degraded-result values shown to the user
NOT_AVAILABLE: Final[str] = "N/D"
CONDITIONS_UNAVAILABLE_TEXT: Final[str] = "Condições atuais indisponíveis"

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
