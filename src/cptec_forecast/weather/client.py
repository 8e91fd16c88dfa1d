"""HTTP client for the CPTEC/INPE XML services."""

import logging
from typing import Any, Dict, Optional

import httpx

from cptec_forecast.config import CPTEC_BASE_URL, HTTP_TIMEOUT_SECONDS, USER_AGENT
from cptec_forecast.weather.xml_decoder import decode_xml

logger = logging.getLogger(__name__)

# Identifier and label tags, never coerced to numbers
TEXT_TAGS = frozenset({"codigo", "nome", "uf", "dia", "tempo", "tempo_desc", "atualizacao"})


class CptecClient:
    """Async client for fetching city, forecast and observation feeds from CPTEC."""

    def __init__(
        self,
        base_url: str = CPTEC_BASE_URL,
        user_agent: str = USER_AGENT,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the CPTEC client.

        Args:
            base_url: Base URL of the CPTEC XML services
            user_agent: User-Agent header for API requests
            http_client: Preconfigured httpx client (creates default if None)
        """
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        if http_client is None:
            options: Dict[str, Any] = {"headers": {"User-Agent": self.user_agent}}
            if HTTP_TIMEOUT_SECONDS is not None:
                options["timeout"] = HTTP_TIMEOUT_SECONDS
            http_client = httpx.AsyncClient(**options)
        self.client = http_client

    async def _get_xml(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a CPTEC document and decode it.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.TransportError: On connection failure or timeout
            XmlDecodeError: If the body is not well-formed XML
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from CPTEC {path}: {e.response.status_code}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error to CPTEC {path}: {e!r}")
            raise

        return decode_xml(response.content, TEXT_TAGS)

    async def get_city_list(self, query: str) -> Dict[str, Any]:
        """Search the city directory by name.

        Args:
            query: Accent-free city name

        Returns:
            Decoded ``cidades`` document
        """
        logger.info(f"Searching CPTEC city directory for '{query}'")
        return await self._get_xml("/listaCidades", params={"city": query})

    async def get_forecast(self, city_code: int) -> Dict[str, Any]:
        """Fetch the multi-day forecast for a city code.

        Returns:
            Decoded ``cidade`` document
        """
        logger.info(f"Fetching CPTEC forecast for city code {city_code}")
        return await self._get_xml(f"/cidade/{city_code}/previsao.xml")

    async def get_current_conditions(self) -> Dict[str, Any]:
        """Fetch current observations for every state capital.

        Returns:
            Decoded ``capitais`` document
        """
        logger.info("Fetching CPTEC current conditions for all capitals")
        return await self._get_xml("/capitais/condicoesAtuais.xml")

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
