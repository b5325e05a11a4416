"""
RaceVault API application.

Serves the asset catalog, per-user collections and the admin content-cache
import.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from racevault.api import (
    boost_names_router,
    catalog_router,
    content_cache_router,
    health_router,
    user_assets_router,
)
from racevault.config import settings
from racevault.db.database import init_db
from racevault.parsers.content_cache import ContentCacheError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables before serving requests."""
    await init_db()
    logger.info("%s ready", settings.app_name)
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("racevault"),
    lifespan=lifespan,
)


@app.exception_handler(ContentCacheError)
async def content_cache_error_handler(_request: Request, exc: ContentCacheError) -> JSONResponse:
    """Reject unreadable content caches with 400 and the validation errors, if any."""
    detail: str | dict[str, object] = str(exc)
    if exc.details:
        detail = {"message": str(exc), "errors": exc.details}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": detail}),
    )


app.include_router(catalog_router)
app.include_router(content_cache_router)
app.include_router(health_router)
app.include_router(user_assets_router)
app.include_router(boost_names_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
