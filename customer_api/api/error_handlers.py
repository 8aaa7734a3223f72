"""Error Handlers — the single seam that turns store outcomes into HTTP responses.

Invariants:
    - Route handlers never build error responses themselves; they hand the
      store result or the exception to the app's ErrorPolicy
    - CollapsedErrorPolicy (default): any failure → 500, text body "Error <message>";
      a missing document → 200 with a JSON null body
    - HttpStatusErrorPolicy: malformed id → 400, missing document → 404,
      driver failure → 503, anything else → 500, all as JSON envelopes
    - Request-body validation failures go through the same policy

Design Decisions:
    - Policy chosen once per app from settings.error_policy and kept on app.state
    - Catch-all handler still registered for failures outside store calls
"""

import logging
from typing import Any, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pymongo.errors import PyMongoError

from customer_api.core.errors import (
    CustomerApiError, CustomerNotFoundError, DatabaseError, ErrorContext,
    ErrorSeverity, InternalError, InvalidCustomerIdError, InvalidPayloadError,
)

logger = logging.getLogger(__name__)


def _json(content: Any, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content, custom_encoder={ObjectId: str}),
    )


class ErrorPolicy(Protocol):
    """Translates a store outcome into a response."""
    def result_response(
        self, result: Any, status_code: int, customer_id: str | None = None,
    ) -> Response: ...
    def error_response(
        self, exc: Exception, operation: str, customer_id: str | None = None,
    ) -> Response: ...


class CollapsedErrorPolicy:
    """Every failure is a 500 with a plain-text "Error " body; not-found is 200/null."""

    name = "collapse"

    def result_response(
        self, result: Any, status_code: int, customer_id: str | None = None,
    ) -> Response:
        return _json(result, status_code)

    def error_response(
        self, exc: Exception, operation: str, customer_id: str | None = None,
    ) -> Response:
        return PlainTextResponse(
            "Error " + str(exc),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


class HttpStatusErrorPolicy:
    """Distinct statuses for malformed ids, missing documents and store failures."""

    name = "http"

    def result_response(
        self, result: Any, status_code: int, customer_id: str | None = None,
    ) -> Response:
        if result is None and customer_id is not None:
            err = CustomerNotFoundError(
                customer_id, ErrorContext(customer_id=customer_id),
            )
            return _json(err.to_response(), err.http_status)
        return _json(result, status_code)

    def error_response(
        self, exc: Exception, operation: str, customer_id: str | None = None,
    ) -> Response:
        err = classify_error(exc, operation, customer_id)
        return _json(err.to_response(), err.http_status)


def classify_error(
    exc: Exception, operation: str, customer_id: str | None = None,
) -> CustomerApiError:
    """Map a raw driver/framework exception onto the error hierarchy."""
    ctx = ErrorContext(customer_id=customer_id, operation=operation)
    if isinstance(exc, CustomerApiError):
        return exc
    if isinstance(exc, InvalidId):
        return InvalidCustomerIdError(customer_id or "", ctx)
    if isinstance(exc, RequestValidationError):
        err = InvalidPayloadError("Invalid request data", ctx)
        err.context.debug_info = {"errors": exc.errors()}
        return err
    if isinstance(exc, PyMongoError):
        return DatabaseError(str(exc), operation, ctx)
    return InternalError("An unexpected error occurred", ctx)


_POLICIES: dict[str, type] = {
    CollapsedErrorPolicy.name: CollapsedErrorPolicy,
    HttpStatusErrorPolicy.name: HttpStatusErrorPolicy,
}


def build_error_policy(name: str) -> ErrorPolicy:
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown error policy '{name}' (expected one of {sorted(_POLICIES)})",
        ) from None


def get_error_policy(request: Request) -> ErrorPolicy:
    """FastAPI dependency for the app's error policy."""
    return request.app.state.error_policy


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Unparseable request bodies follow the app's error policy."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        customer_id = request.path_params.get("customer_id")
        return get_error_policy(request).error_response(
            exc, operation="validate", customer_id=customer_id,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
