"""
Main entrypoint for the Hotel Booking API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn hotel_booking_api.app.main:app --reload

The hotel service (store plus media relay) is built once per
application and kept on ``app.state``; handlers receive it through a
dependency instead of importing a global.
"""

from typing import Optional

from fastapi import FastAPI

from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db
from .services.hotel_service import HotelService
from .services.hotel_store import HotelStore
from .services.media_service import MediaRelay, configure_cloudinary


def create_app(settings: Optional[Settings] = None, relay: Optional[MediaRelay] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use instead of the environment-derived
        defaults.
    relay : Optional[MediaRelay]
        Media relay to use instead of one talking to Cloudinary.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    if relay is None:
        configure_cloudinary(
            settings.cloudinary_cloud_name,
            settings.cloudinary_api_key,
            settings.cloudinary_api_secret,
        )
        relay = MediaRelay(
            folder=settings.cloudinary_folder,
            timeout=settings.relay_timeout_seconds,
        )

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.hotel_service = HotelService(
        HotelStore(settings.database_url),
        relay,
        max_image_count=settings.max_image_count,
        max_image_bytes=settings.max_image_bytes,
        cleanup_images_on_delete=settings.cleanup_images_on_delete,
    )

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up to date.
        init_db(settings.database_url)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
