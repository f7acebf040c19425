import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from booking_engine.domain.errors import DomainError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_DATE_RANGE": status.HTTP_400_BAD_REQUEST,
    "PRICING_VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "PRICING_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "UNIT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESERVATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UNIT_NOT_AVAILABLE": status.HTTP_409_CONFLICT,
    "INVALID_RESERVATION_STATUS": status.HTTP_409_CONFLICT,
    "OPTIMISTIC_LOCK_ERROR": status.HTTP_409_CONFLICT,
    "STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: DomainError) -> int:
    return STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain failures to their HTTP status; the message is always client-safe."""
    status_code = status_for(exc)
    log = logger.warning if status_code >= 500 else logger.info
    log(
        "Request failed with domain error",
        extra={"code": exc.code, "path": request.url.path, "status_code": status_code},
    )

    content = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ValidationError):
        content["field"] = exc.field
    headers = {"Retry-After": "5"} if status_code == status.HTTP_503_SERVICE_UNAVAILABLE else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)
