"""Page-related schemas."""

from __future__ import annotations

from pydantic import BaseModel


class PageCreate(BaseModel):
    """Request body for creating a page.

    Both fields are optional here so that missing values reach the endpoint
    and get the dedicated 400 response.
    """

    title: str | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    """Error body returned to clients."""

    error: str
