"""Domain error -> HTTP response mapping."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.errors import DomainError

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "ACCESS_DENIED": status.HTTP_403_FORBIDDEN,
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "CONFLICT": status.HTTP_400_BAD_REQUEST,
    "VEHICLE_UNAVAILABLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATE": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "IDEMPOTENCY_CONFLICT": status.HTTP_409_CONFLICT,
}


def status_for(error: DomainError) -> int:
    return STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "Request rejected",
        extra={
            "path": request.url.path,
            "method": request.method,
            "code": exc.code,
            "status_code": status_code,
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message, "details": exc.details},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "INVALID_INPUT",
            "message": "Request validation failed",
            "details": {"errors": errors},
        },
    )
