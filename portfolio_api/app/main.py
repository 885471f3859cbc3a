"""
Main entrypoint for the Portfolio API.

This module assembles the FastAPI application: logging, CORS, the
error envelope handlers and the API router.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn portfolio_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.db import init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .api.router import router as api_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies pending migrations.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
