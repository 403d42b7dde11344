"""
Hearth Backend Application

FastAPI application serving the zone and device collections.
"""

import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from backend import log_config
from backend.api import router as api_router
from core.hearth import __version__
from core.hearth.exceptions import ConfigurationError, HearthError, MalformedInputError
from core.hearth.settings import HearthSettings, load_settings
from core.hearth.store import Store

# Hearth error -> HTTP status; other Hearth errors are server errors
ERROR_STATUS_CODES = {
    MalformedInputError: 400,
    ConfigurationError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown."""
    # Startup
    logger.info("Hearth starting")

    # Log registered routes
    routes = [
        f"{getattr(route, 'path', '?')} - {getattr(route, 'methods', ['MOUNT'])}"
        for route in app.routes
    ]
    logger.info(f"Registered routes: {routes}")

    store = app.state.store
    logger.info(f"Serving {len(store.zones)} zone(s) and {len(store.devices)} device(s)")

    yield

    # Shutdown
    logger.info("Hearth shutting down")


def create_app(
    store: Optional[Store] = None,
    settings: Optional[HearthSettings] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        store: Collections to serve; a new store seeded from settings if omitted
        settings: Server settings; loaded from config files if omitted

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_settings()
        log_config.setup_logging(settings.log_level)
    if store is None:
        store = Store()
        store.seed(settings)

    app = FastAPI(
        title="Hearth API",
        description="Zones and devices for home heating control",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    @app.exception_handler(HearthError)
    async def hearth_error_handler(request, exc):
        """Map Hearth errors to a JSON error response."""
        status_code = ERROR_STATUS_CODES.get(type(exc), 500)
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc), "type": type(exc).__name__})

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Handle all unhandled exceptions gracefully."""
        tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        logger.error(f"Unhandled exception: {exc}")
        logger.error(f"Request path: {request.url.path}")
        logger.error(f"Stack trace:\n{tb_str}")

        return JSONResponse(
            status_code=500,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
                "message": "Internal server error",
            },
        )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app


def main() -> None:
    """Run the server with the configured host and port."""
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


app = create_app()


# For development
if __name__ == "__main__":
    main()
