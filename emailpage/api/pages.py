"""Page API endpoints: create and serve generated pages."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse, Response

from emailpage.api.deps import get_page_store, get_page_template, get_preview_renderer, get_settings
from emailpage.config import Settings
from emailpage.exceptions import PersistenceError
from emailpage.filesystem.page_store import PageStore
from emailpage.schemas.page import ErrorResponse, PageCreate
from emailpage.services.notification_service import send_page_notification
from emailpage.services.page_service import create_page
from emailpage.services.preview_service import PreviewRenderer, generate_page_preview

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


@router.post(
    "/new",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_page_endpoint(
    background_tasks: BackgroundTasks,
    settings: Annotated[Settings, Depends(get_settings)],
    store: Annotated[PageStore, Depends(get_page_store)],
    template: Annotated[str, Depends(get_page_template)],
    renderer: Annotated[PreviewRenderer, Depends(get_preview_renderer)],
    body: PageCreate | None = None,
) -> Response:
    """Create a page from a title and message and email a link to it."""
    if body is None or not body.title or not body.message:
        return JSONResponse(status_code=400, content={"error": "Title and message are required"})

    try:
        page = create_page(store, template, settings, body.title, body.message)
    except Exception as exc:
        logger.error("Error creating page: %s", exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Failed to create page"})

    # Run after the response is sent; both swallow their own errors.
    background_tasks.add_task(send_page_notification, settings, page.url, body.title)
    background_tasks.add_task(
        generate_page_preview, renderer, store, page.page_id, page.content, body.title
    )
    return Response(status_code=204, headers={"Location": f"/{page.page_id}"})


@router.get("/img/page-{page_id}.png", response_class=FileResponse)
async def get_page_image(
    page_id: str,
    store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    """Serve a page's Open Graph preview image."""
    image_path = store.load_image_path(page_id)
    if image_path is None:
        return PlainTextResponse("Image not found", status_code=404)
    return FileResponse(image_path, media_type="image/png")


@router.get("/{page_id}", response_class=HTMLResponse)
async def get_page_endpoint(
    page_id: str,
    store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    """Serve a stored page."""
    try:
        content = store.load(page_id)
    except PersistenceError as exc:
        logger.error("Error serving page %s: %s", page_id, exc, exc_info=exc)
        return PlainTextResponse("Error serving page", status_code=500)
    if content is None:
        return PlainTextResponse("Page not found", status_code=404)
    return HTMLResponse(content)
