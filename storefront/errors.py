"""
Exception handlers that give every error response the same body:
``{"success": false, "message": "..."}``.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "
INVALID_JSON = "Request body must be valid JSON"
MISSING_BODY = "Request body is required"


def first_error_message(errors: List[Dict[str, Any]]) -> str:
    """Message of the first validation error, as raised by our validators."""
    if not errors:
        return "Invalid request"

    error = errors[0]
    if error.get("type") == "json_invalid":
        return INVALID_JSON

    ctx = error.get("ctx") or {}
    if isinstance(ctx.get("error"), Exception):
        return str(ctx["error"])

    message = str(error.get("msg", "Invalid request"))
    if message.startswith(VALUE_ERROR_PREFIX):
        return message[len(VALUE_ERROR_PREFIX):]

    # Type errors name the offending field, e.g. "email: Input should be a valid string"
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {message}" if field else message


def validation_message(exc: ValidationError) -> str:
    return first_error_message(exc.errors())


def is_missing_body(errors: List[Dict[str, Any]]) -> bool:
    if not errors:
        return False
    return errors[0].get("type") == "missing" and tuple(errors[0].get("loc", ())) == ("body",)


def missing_body_message(request: Request) -> str:
    """Validate an empty object against the route's body model and report its first failure."""
    route = request.scope.get("route")
    body_field = getattr(route, "body_field", None)
    model = getattr(getattr(body_field, "field_info", None), "annotation", None)
    if isinstance(model, type) and issubclass(model, BaseModel):
        try:
            model.model_validate({})
        except ValidationError as e:
            return validation_message(e)
    return MISSING_BODY


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    if is_missing_body(errors):
        message = missing_body_message(request)
    else:
        message = first_error_message(errors)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
