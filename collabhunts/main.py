from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from collabhunts.config import get_settings
from collabhunts.infrastructure.database import engine, initialize_database
from collabhunts.interfaces.api.routes import register_routes

_CORS_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup when enabled and release the pool on exit."""

    if get_settings().database_auto_create:
        initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="CollabHunts booking monitors", lifespan=lifespan)

    # Browser dashboards may call the triggers directly; answers CORS preflight.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=_CORS_ALLOWED_HEADERS,
    )

    register_routes(app)
    return app
