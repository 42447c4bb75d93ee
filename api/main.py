import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from adapters.base import DatabaseAdapter
from adapters.factory import get_adapter
from api.deps import error_response
from api.routes import health_router
from api.routes import router as movies_router
from api.users import router as users_router
from catalog.tables import bootstrap
from utils.config import AppConfig, load_config
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

TITLES = {
    "movies": "Movie Catalog API",
    "users": "User Registry API",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup/shutdown:
      - pick the engine and open its connection
      - create the table (and seed movies) before any route is served
      - close the connection on shutdown
    A failure before ``yield`` aborts startup.
    """
    config: AppConfig = app.state.config
    db: DatabaseAdapter = app.state.adapter_override or get_adapter(config.db_type, config.source_config())

    logger.info("Starting %s...", TITLES[config.resource])
    logger.info("DATABASE_URL: %s", "Set (hidden)" if config.database_url else "Not set")
    logger.info("Database: %s | Environment: %s", db.display_name, config.environment)
    try:
        await db.connect()
        logger.info("%s connection test successful", db.display_name)
        seeded = await bootstrap(db, config.resource, seed=config.seed_data)
    except Exception:
        logger.exception("Failed to initialize %s", db.display_name)
        await db.close()
        raise
    if seeded:
        logger.info("Seeded %d sample movies", seeded)
    logger.info("Table '%s' ready", config.resource)

    app.state.db = db
    try:
        yield
    finally:
        logger.info("Shutting down, closing %s connection", db.display_name)
        app.state.db = None
        await db.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", []) if loc != "body"),
            "message": error.get("msg", "Validation error"),
        }
        for error in exc.errors()
    ]
    logger.warning("Validation error: %s %s -> %d errors", request.method, request.url.path, len(errors))
    return error_response(400, "Invalid field values", errors=errors)


def create_app(config: Optional[AppConfig] = None, adapter: Optional[DatabaseAdapter] = None) -> FastAPI:
    """Build the application. With no arguments, settings come from .env and the
    process environment, so `uvicorn --factory api.main:create_app` works.
    """
    config = config or load_config()
    configure_logging(config.log_level)
    app = FastAPI(
        title=TITLES[config.resource],
        version="1.0.0",
        description="CRUD over a single table on PostgreSQL, MySQL or SQLite",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.adapter_override = adapter
    app.state.db = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    if config.resource == "users":
        upload_dir = Path(config.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.include_router(users_router)
        app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")
    else:
        app.include_router(movies_router)
        app.include_router(health_router)
    return app
