"""Failure taxonomy for the forecast pipeline.

Every failed request surfaces exactly one of these errors. Each carries
the kind name used in logs, the HTTP status the boundary answers with and
a message that can be shown to the end user as-is.
"""

import asyncio
import logging
from enum import Enum

import httpx
from geopy.exc import GeocoderTimedOut

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Fixed set of user-facing failure reasons."""
    INVALID_INPUT = "InvalidInput"
    LOCATION_NOT_FOUND = "LocationNotFound"
    CITY_NOT_FOUND = "CityNotFound"
    FORECAST_UNAVAILABLE = "ForecastUnavailable"
    UPSTREAM_TRANSPORT_ERROR = "UpstreamTransportError"


class ForecastPipelineError(Exception):
    """Base class for classified pipeline failures."""

    kind: ErrorKind = ErrorKind.UPSTREAM_TRANSPORT_ERROR
    status_code: int = 500
    default_message: str = "Serviço de previsão temporariamente indisponível."

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ForecastPipelineError):
    """Neither a place name nor a full coordinate pair was given."""
    kind = ErrorKind.INVALID_INPUT
    status_code = 400
    default_message = "Informe o nome do local ou a latitude (lat) e a longitude (lon)."


class LocationNotFoundError(ForecastPipelineError):
    """Reverse geocoding produced no usable place name."""
    kind = ErrorKind.LOCATION_NOT_FOUND
    default_message = "Não foi possível identificar um local para as coordenadas informadas."


class CityNotFoundError(ForecastPipelineError):
    """City directory has no entry for the place name."""
    kind = ErrorKind.CITY_NOT_FOUND
    default_message = "Cidade não encontrada no diretório de previsão."


class ForecastUnavailableError(ForecastPipelineError):
    """Forecast feed failed or had no usable days."""
    kind = ErrorKind.FORECAST_UNAVAILABLE
    default_message = "Não foi possível obter os dados da previsão."


class UpstreamTransportError(ForecastPipelineError):
    """Network or timeout failure talking to an upstream service."""
    kind = ErrorKind.UPSTREAM_TRANSPORT_ERROR


TRANSPORT_EXCEPTIONS = (
    httpx.TransportError,
    GeocoderTimedOut,
    asyncio.TimeoutError,
)


def classify_error(exc: BaseException) -> ForecastPipelineError:
    """Map any exception raised inside the pipeline to one classified error.

    Args:
        exc: Exception caught at a pipeline boundary

    Returns:
        The exception itself if already classified, otherwise an
        UpstreamTransportError wrapping it
    """
    if isinstance(exc, ForecastPipelineError):
        return exc

    if isinstance(exc, TRANSPORT_EXCEPTIONS):
        logger.error(f"Upstream transport failure: {exc!r}")
    else:
        logger.error(f"Unclassified pipeline failure: {exc!r}")

    error = UpstreamTransportError()
    error.__cause__ = exc
    return error
