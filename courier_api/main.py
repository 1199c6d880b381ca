"""
FastAPI application factory and entry point.

create_app(settings) builds a fully wired application from an explicit
configuration record:
  1. Lifespan manager - creates tables on startup, disposes the engine on shutdown
  2. CORS middleware - allows the web frontend to make cross-origin requests
  3. Exception handlers - maps domain errors and unexpected failures to JSON
  4. Router registration - mounts the auth and user endpoint groups

Running locally:
    courier-api                      # or: python -m courier_api.main

run() loads the environment once, configures logging and serves the app with
uvicorn on PORT (3000 when unset).
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courier_api import models  # noqa: F401  (registers tables on Base.metadata)
from courier_api.config import Settings, load_settings
from courier_api.database import Base, build_engine, build_sessionmaker
from courier_api.exceptions import register_exception_handlers
from courier_api.routers import auth, users


logger = logging.getLogger(__name__)

APP_TITLE = "Courier API"
APP_VERSION = "0.1.0"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.is_development else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      Creates all tables that don't exist yet. Schema changes beyond that
      are out of scope for this service.

    Shutdown:
      Disposes of the database engine, closing all connections cleanly.
    """
    engine = app.state.engine
    logger.info("Starting %s (environment=%s)", APP_TITLE, app.state.settings.environment)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    logger.info("Shutting down %s", APP_TITLE)
    await engine.dispose()


def create_app(settings: Settings) -> FastAPI:
    """
    Build the application around one configuration record.

    The settings, engine and session factory are stored on app.state so that
    dependencies (get_settings, get_db) can reach them per request.
    """
    app = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        description="User profile and authentication endpoints for the courier platform",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_sessionmaker(engine)

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else ["http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Exception handlers
    # -----------------------------------------------------------------------

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    # Mounted with and without the /api prefix, as existing clients use both
    for prefix in ("", "/api"):
        in_schema = prefix == ""
        app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"], include_in_schema=in_schema)
        app.include_router(users.router, prefix=f"{prefix}/user", tags=["Users"], include_in_schema=in_schema)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe for load balancers and orchestrators."""
        return {"status": "ok", "environment": settings.environment}

    return app


def run() -> None:
    """Console entry point: load settings once and serve."""
    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.listen_port())


if __name__ == "__main__":
    run()
