"""Exception handlers rendering domain and request errors as envelopes."""

from collections import defaultdict
from typing import Any, Iterable

import logfire
import pydantic
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog.domain.error import (
    BusinessRuleViolationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from blog.interface.api.envelope import ErrorEnvelope

# Location prefixes FastAPI adds in front of the field path
_LOCATION_PREFIXES = {"body", "query", "path", "cookie", "header"}


def _error_response(
    status_code: int, message: str, errors: dict[str, list[str]] | None = None
) -> JSONResponse:
    body = ErrorEnvelope(message=message, errors=errors)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


def _field_errors(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = defaultdict(list)
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        grouped[".".join(loc) or "__root__"].append(error.get("msg", "Invalid value"))
    return dict(grouped)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logfire.warn("Request validation failed", path=request.url.path)
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation errors",
        _field_errors(exc.errors()),
    )


async def model_validation_handler(
    request: Request, exc: pydantic.ValidationError
) -> JSONResponse:
    logfire.warn("Model validation failed", path=request.url.path)
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation errors",
        _field_errors(exc.errors()),
    )


async def domain_validation_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    logfire.warn("Domain validation failed", path=request.url.path, field=exc.field)
    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation errors",
        {exc.field: [exc.message]},
    )


async def not_authorized_handler(
    request: Request, exc: NotAuthorizedError
) -> JSONResponse:
    return _error_response(status.HTTP_403_FORBIDDEN, "This action is unauthorized.")


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found")


async def business_rule_handler(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    logfire.warn("Business rule violated", path=request.url.path, error=str(exc))
    return _error_response(status.HTTP_409_CONFLICT, str(exc))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorEnvelope(message=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the envelope renderers on the application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(pydantic.ValidationError, model_validation_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(NotAuthorizedError, not_authorized_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(BusinessRuleViolationError, business_rule_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
