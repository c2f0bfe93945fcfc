"""Application-level exception types.

Convention:
- ``InternalServerError``: for errors whose details must never reach clients.
  The global handler logs the full message at ERROR and returns a generic
  ``{"error": "Internal server error"}`` (500) to the client.
- ``PersistenceError``: a page store read or write failed.  Endpoints catch it
  and answer with their own generic 500 body.
- ``ConfigurationError``: startup cannot continue (e.g. the page template is
  missing).  Raised from the lifespan, so the server refuses to start.
- Missing request fields are answered directly by the endpoint with 400.
"""

from __future__ import annotations


class InternalServerError(Exception):
    """Raised for internal errors whose details must not be exposed to clients.

    The global exception handler in ``emailpage/main.py`` catches this, logs
    the full message server-side, and returns HTTP 500 with a generic body.
    """


class PersistenceError(InternalServerError):
    """Raised when the page store fails to read or write a file."""


class ConfigurationError(Exception):
    """Raised when required startup configuration is missing or unusable."""
