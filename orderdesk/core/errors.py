# orderdesk/core/errors.py
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderdesk.core.config import get_settings

log = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    message = "Validation error"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ForbiddenError(AppError):
    status_code = 403
    message = "Forbidden"


class UnavailableError(AppError):
    status_code = 400
    message = "Unavailable"


class UploadTooLarge(AppError):
    status_code = 413
    message = "File too large"


class TenantNotFound(NotFoundError):
    message = "Restaurant not found"


class TenantUnavailable(ForbiddenError):
    message = "This restaurant is not accepting orders at the moment"


class CategoryNotFound(NotFoundError):
    message = "Category not found"


class ProductNotFound(NotFoundError):
    message = "Product not found"


class OrderNotFound(NotFoundError):
    message = "Order not found"


class ProductsUnavailable(UnavailableError):
    message = "Some products are not available"


def error_body(message: str, details: Any = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.message, exc.details)),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    log.info("%s %s -> 400 validation error", request.method, request.url.path)
    return JSONResponse(status_code=400, content=jsonable_encoder(error_body("Validation error", details)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Framework-raised errors (401 from auth, 404 for unknown routes, 405...)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = {"error": "Internal server error"}
    if get_settings().expose_error_details:
        body["message"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
