# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.errors import (
    CommerceError,
    ValidationError,
    NotFoundError,
    AuthorizationError,
    UnauthenticatedError,
    ConflictError,
    TransientStoreError,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

# kolejnosc ma znaczenie - podklasy przed klasami bazowymi
STATUS_CODES = [
    (UnauthenticatedError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (TransientStoreError, 503),
]


def status_for(error: CommerceError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def commerce_error_handler(request: Request, exc: CommerceError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.code}")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": exc.message},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "error": ValidationError.code,
            "detail": f"Niepoprawne pola: {', '.join(fields)}",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CommerceError, commerce_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
