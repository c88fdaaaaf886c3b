"""HTTP translation of domain results.

Routes call ``unwrap`` on every use-case result. An ``Err`` is raised as its
``DomainError`` and rendered by the handlers registered here as
``{"name", "error", "status_code"}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from catalogue.errors import ProductNotFoundError
from identity.errors import AccessDeniedError, InvalidCredentialsError, InvalidTokenError, UserNotFoundError
from ordering.errors import (
    CheckoutFailureError,
    EmptyCartError,
    InvalidProductQuantityError,
    OrderNotFoundError,
    ProductNotAvailableError,
    PurchaseIntentNotFoundError,
)
from payments.errors import EventNotProcessError, GatewayIncompatibilityError
from shared.errors import DomainError
from shared.result import Result

logger = structlog.get_logger(__name__)

STATUS_CODES: dict[type[DomainError], int] = {
    InvalidProductQuantityError: 400,
    ProductNotFoundError: 404,
    ProductNotAvailableError: 409,
    EmptyCartError: 400,
    CheckoutFailureError: 502,
    GatewayIncompatibilityError: 401,
    EventNotProcessError: 422,
    UserNotFoundError: 404,
    PurchaseIntentNotFoundError: 404,
    OrderNotFoundError: 404,
    InvalidTokenError: 401,
    InvalidCredentialsError: 401,
    AccessDeniedError: 403,
}


def status_code_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 400


def unwrap(result: Result):
    """Return the value of an ``Ok``; raise the error carried by an ``Err``."""
    if result.is_err():
        raise result.error
    return result.value


def error_body(name: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"name": name, "error": message, "status_code": status_code},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_code_for(exc)
        logger.info("Request refused", path=request.url.path, error=exc.name, status_code=status_code)
        return error_body(exc.name, exc.message, status_code)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        messages = "; ".join(f"{field}: {', '.join(errors)}" for field, errors in exc.messages.items())
        return error_body("ValidationError", messages, 400)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return error_body("ObjectNotFoundError", str(exc), 404)
