"""Render every failure as ``{"errorKind": ..., "message": ...}``."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import logger
from storefront.errors import BadRequest, InternalError, NotFound, StorefrontError, first_message


def _render(error: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def _describe(errors) -> str:
    """Summarise FastAPI's request-validation errors in one line."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    # Protean's defaults first, then our envelope for the kinds callers see
    register_exception_handlers(app)

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return _render(exc)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _render(BadRequest(first_message(exc.messages)))

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return _render(NotFound("Not found"))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _render(BadRequest(_describe(exc.errors())))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return _render(InternalError("Something went wrong"))
