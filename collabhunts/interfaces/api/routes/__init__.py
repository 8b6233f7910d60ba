from fastapi import FastAPI

from .functions import router as functions_router
from .health import router as health_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(functions_router)
