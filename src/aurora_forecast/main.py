"""Main FastAPI application for the aurora forecast service."""

import logging
import os
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from aurora_forecast.api.endpoints import router as forecast_router
from aurora_forecast.config import HOST, PORT, DEBUG, LOAD_ON_STARTUP
from aurora_forecast.forecast.controller import ForecastController
from aurora_forecast.logging_config import configure_logging

logger = logging.getLogger(__name__)

STATIC_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    controller: ForecastController = app.state.controller
    try:
        logger.info("Starting Aurora Kp Forecast Service")
        if LOAD_ON_STARTUP:
            await controller.load_all()
            for error in controller.state.errors:
                logger.warning(f"Startup load: {error}")
        yield
    except Exception as e:
        logger.error(f"Startup error: {e}")
        logger.error(traceback.format_exc())
        raise
    finally:
        logger.info("Shutting down Aurora Kp Forecast Service")
        await controller.aclose()


def create_app(controller: Optional[ForecastController] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        controller: Forecast controller to serve (creates default if None)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Aurora Kp Forecast Service",
        description="Three-day and 27-day planetary Kp index forecasts from NOAA SWPC",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.controller = controller or ForecastController()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(forecast_router)

    app.mount("/static", StaticFiles(directory=STATIC_PATH), name="static")

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint serving the chart page."""
        return FileResponse(os.path.join(STATIC_PATH, "index.html"))

    @app.get("/api", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "Aurora Kp Forecast Service",
            "docs": "/docs",
            "redoc": "/redoc",
            "forecast": "/forecast",
            "health": "/forecast/health"
        }

    return app


def main() -> None:
    """Main entry point for the application."""
    configure_logging(logging.DEBUG if DEBUG else logging.INFO)
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        create_app(),
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
