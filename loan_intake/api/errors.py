"""Map domain error kinds to HTTP responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loan_intake.api.dependencies import get_request_id
from loan_intake.config import settings
from loan_intake.domain.exceptions import DomainException, ErrorKind, FieldIssue, ValidationFailedError
from loan_intake.infrastructure.observability.metrics import record_error

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNEXPECTED: 500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_body(error: DomainException) -> dict:
    body = {"message": error.message}
    if isinstance(error, ValidationFailedError):
        body["errors"] = [issue.to_dict() for issue in error.issues]
    return {"error": body}


def unexpected_body(error: Exception) -> dict:
    message = INTERNAL_ERROR_MESSAGE if settings.is_production else (str(error) or INTERNAL_ERROR_MESSAGE)
    return {"error": {"message": message}}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    record_error(exc.kind.value)

    if exc.kind is ErrorKind.UNEXPECTED:
        logger.error(
            f"Unexpected error: {exc.message}",
            exc_info=exc,
            extra={"request_id": get_request_id(request), "path": request.url.path},
        )
        return JSONResponse(status_code=status_code, content=unexpected_body(exc))

    logger.warning(
        f"{exc.kind.value}: {exc.message}",
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query strings get the same shape as use case validation failures"""
    issues = [
        FieldIssue(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            message=error["msg"],
            code=error["type"],
        )
        for error in exc.errors()
    ]
    return await domain_exception_handler(request, ValidationFailedError("Validation failed", issues))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    record_error(ErrorKind.UNEXPECTED.value)
    logger.error(
        f"Unhandled error: {exc}",
        exc_info=exc,
        extra={"request_id": get_request_id(request), "path": request.url.path},
    )
    return JSONResponse(status_code=500, content=unexpected_body(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
