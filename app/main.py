import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import Settings, settings as default_settings
from app.database import Database
from app.errors import register_exception_handlers
from app.logger import setup_logging
from app.middleware import TimingMiddleware
from app.routers import comments, posts, tags, users

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the application.

    When *database* is omitted the lifespan opens one from
    ``settings.database_url`` and disposes of it on shutdown; a supplied
    database is used as-is and stays owned by the caller.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        owned = app.state.db is None
        if owned:
            app.state.db = Database(settings.database_url, echo=settings.DEBUG)
        await app.state.db.create_all()
        logger.info("Schema ready on %s", app.state.db.url)
        yield
        # Shutdown
        if owned:
            await app.state.db.dispose()
            app.state.db = None

    app = FastAPI(
        title="Blog CMS API",
        description="CRUD backend for users, posts, tags and comments",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.db = database

    # Middleware
    app.add_middleware(GZipMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TimingMiddleware)

    register_exception_handlers(app)

    # Routers
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(tags.router)
    app.include_router(comments.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": VERSION}

    # Static UI, mounted after the API routes so /api/* takes precedence.
    if os.path.isdir(settings.ASSETS_DIR):
        app.mount("/", StaticFiles(directory=settings.ASSETS_DIR, html=True), name="static")

    return app


app = create_app()
