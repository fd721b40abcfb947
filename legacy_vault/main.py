"""legacy-vault FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from legacy_vault.api import activity, admin, assets, auth, dashboard, health, mood, nominees, wellbeing
from legacy_vault.core.config import settings
from legacy_vault.core.errors import VaultError
from legacy_vault.services import registration_service

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await registration_service.ensure_indexes()
    except PyMongoError as exc:
        logger.warning("Could not create registration indexes: %s", exc)
    logger.info("%s started", settings.app_name)
    yield


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(VaultError)
async def vault_error_handler(request: Request, exc: VaultError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(wellbeing.router)
app.include_router(nominees.router)
app.include_router(assets.router)
app.include_router(mood.router)
app.include_router(dashboard.router)
app.include_router(activity.router)
app.include_router(admin.router)
