"""Main FastAPI application for the CPTEC forecast service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cptec_forecast.api.endpoints import router as weather_router
from cptec_forecast.config import HOST, PORT, DEBUG, CPTEC_BASE_URL
from cptec_forecast.errors import ForecastPipelineError, InvalidInputError, classify_error
from cptec_forecast.logging_config import configure_logging
from cptec_forecast.weather.models import ErrorResponse

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(f"Starting CPTEC Forecast Service (upstream: {CPTEC_BASE_URL})")
    try:
        yield
    finally:
        logger.info("Shutting down CPTEC Forecast Service")


def error_response(error: ForecastPipelineError) -> JSONResponse:
    """Render a classified error as the failure envelope."""
    body = ErrorResponse(message=error.message)
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


async def pipeline_error_handler(_request: Request, exc: ForecastPipelineError) -> JSONResponse:
    """Classified failures keep their own status and message."""
    return error_response(exc)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or out-of-range query parameters are invalid input."""
    logger.info(f"Rejected request parameters: {exc.errors()}")
    return error_response(InvalidInputError())


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Anything that escaped the pipeline is classified before rendering."""
    return error_response(classify_error(exc))


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="CPTEC Forecast Service",
        description="REST API service that provides daily forecasts and current conditions from CPTEC/INPE",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ForecastPipelineError, pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API routers
    app.include_router(weather_router)

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "CPTEC Forecast Service",
            "docs": "/docs",
            "redoc": "/redoc",
            "weather": "/weather",
            "health": "/weather/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "cptec_forecast.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
