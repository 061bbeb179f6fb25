"""
Alligator - Social networking backend
Main FastAPI application with MongoDB and JWT authentication
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.routes import auth_router, pages_router, posts_router, users_router
from .config import Settings
from .errors import register_exception_handlers
from .infrastructure.database import MongoDB
from .infrastructure.storage import MediaStorage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process"""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s...", settings.APP_NAME)
    await app.state.mongodb.connect()
    logger.info("%s v%s started", settings.APP_NAME, settings.APP_VERSION)

    yield

    # Shutdown
    logger.info("Shutting down %s...", settings.APP_NAME)
    await app.state.mongodb.disconnect()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from explicit settings"""
    if settings is None:
        settings = Settings()

    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Minimal social networking backend with MongoDB and JWT tokens",
        lifespan=lifespan
    )

    media_dir = os.path.join(settings.PUBLIC_DIR, settings.MEDIA_DIR)

    app.state.settings = settings
    app.state.mongodb = MongoDB(settings)
    app.state.media_storage = MediaStorage(media_dir, url_prefix=settings.media_url_prefix)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    app.include_router(pages_router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(users_router)

    app.mount(settings.media_url_prefix, StaticFiles(directory=media_dir), name="media")

    return app


def run() -> None:
    """Serve the application with uvicorn"""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "alligator_service.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
