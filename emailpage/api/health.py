"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from emailpage import __version__
from emailpage.api.deps import get_page_store
from emailpage.filesystem.page_store import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    storage: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    store: Annotated[PageStore, Depends(get_page_store)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    storage_status = "ok"
    if not store.is_writable():
        logger.warning("Health check: data directory %s is not writable", store.data_dir)
        storage_status = "error"

    return HealthResponse(
        status="ok" if storage_status == "ok" else "degraded",
        version=__version__,
        storage=storage_status,
    )
