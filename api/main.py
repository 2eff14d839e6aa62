"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy parser formuł współdzielony przez wszystkie żądania
  - Ewaluator powstaje per żądanie (własny sink diagnostyk)
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adapters.formula_parser.recursive_parser import RecursiveFormulaParser
from api.routers import evaluate
from api.schemas import HealthResponse
from config import Settings

logger = logging.getLogger("fint")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.formula_parser = RecursiveFormulaParser()
    logger.info("FINT API ready.")
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    return app


app = create_app()
