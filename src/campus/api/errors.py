"""Translate domain errors into JSON responses.

Every response body has the same shape: ``{"error": <type>, "messages": {...}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from campus.exceptions import ExternalStoreError, InvalidStateTransition, PermissionDenied

logger = structlog.get_logger(__name__)


def _messages(exc):
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return messages
    return {"_entity": [messages if isinstance(messages, str) else exc.__class__.__name__]}


def _error_response(status_code, exc, **extra):
    content = {"error": exc.__class__.__name__, "messages": _messages(exc), **extra}
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError):
    return _error_response(422, exc)


async def _invalid_state_transition(request: Request, exc: InvalidStateTransition):
    return _error_response(409, exc)


async def _permission_denied(request: Request, exc: PermissionDenied):
    logger.info("Permission denied", path=request.url.path)
    return _error_response(403, exc)


async def _not_found(request: Request, exc: ObjectNotFoundError):
    return _error_response(404, exc)


async def _external_store_error(request: Request, exc: ExternalStoreError):
    return _error_response(503, exc, retry_safe=exc.retry_safe)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidStateTransition, _invalid_state_transition)
    app.add_exception_handler(PermissionDenied, _permission_denied)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ExternalStoreError, _external_store_error)
