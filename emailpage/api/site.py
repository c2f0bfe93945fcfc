"""Informational home page."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from emailpage.api.deps import get_settings
from emailpage.config import Settings

router = APIRouter(tags=["site"])


@router.get("/", response_class=FileResponse)
async def home(settings: Annotated[Settings, Depends(get_settings)]) -> FileResponse:
    """Serve the static home page."""
    index_path = settings.static_dir / "index.html"
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(index_path, media_type="text/html")
