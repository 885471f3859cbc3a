"""
Error types and their JSON rendering.

Every error leaves the API in the same envelope as successful
responses: ``{"status": false, "message": ...}`` for not‑found and
authentication failures, ``{"status": false, "errors": {...}}`` for
validation failures.  ``register_exception_handlers`` wires the
handlers into a FastAPI application.
"""

import logging
from typing import Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ValidationFailed(Exception):
    """Raised when a payload does not satisfy its rule table.

    ``errors`` maps each offending field to a list of messages.
    """

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        super().__init__("The given data was invalid.")
        self.errors = errors


class NotFound(Exception):
    """Raised when a record does not exist."""

    def __init__(self, label: str) -> None:
        self.message = f"{label} not found"
        super().__init__(self.message)


_BODY_MESSAGES = {
    "json_invalid": "The request body must be valid JSON.",
    "dict_type": "The request body must be a JSON object.",
    "model_attributes_type": "The request body must be a JSON object.",
}


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": False, "errors": exc.errors},
    )


async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"status": False, "message": exc.message},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework and auth errors as a ``status``/``message`` envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI's own request parsing errors onto the envelope.

    A path identifier that is not an integer cannot name an existing
    record, so it is reported as 404.  Everything else concerns the
    request body and is reported as a 400 validation failure.
    """
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc and loc[0] == "path":
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"status": False, "message": "Not found"},
            )
        field = "body"
        if len(loc) > 1 and isinstance(loc[-1], str):
            field = loc[-1]
        message = _BODY_MESSAGES.get(error.get("type"), error.get("msg", "Invalid value."))
        errors.setdefault(field, []).append(message)
    logger.debug("Rejected malformed request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": False, "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope renderers on ``app``."""
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
