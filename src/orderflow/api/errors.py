"""Map exceptions to the ``{"code", "message"}`` error envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError

from orderflow.errors import ErrorCode, OrderFlowError

logger = structlog.get_logger(__name__)


def _envelope(error_code: ErrorCode, message: str | None = None, details=None) -> JSONResponse:
    content = {"code": error_code.code, "message": message or error_code.message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=error_code.http_status, content=content)


async def handle_orderflow_error(request: Request, exc: OrderFlowError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, code=exc.code, reason=exc.message)
    return _envelope(exc.error_code, exc.message)


async def handle_domain_validation_error(request: Request, exc: ValidationError | InvalidDataError) -> JSONResponse:
    return _envelope(ErrorCode.INVALID_REQUEST, details=exc.messages)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {".".join(str(p) for p in err["loc"]): err["msg"] for err in exc.errors()}
    return _envelope(ErrorCode.INVALID_REQUEST, details=details)


async def handle_object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # Raw store misses should have been translated; never leak store internals
    logger.warning("Untranslated ObjectNotFoundError", path=request.url.path)
    return _envelope(ErrorCode.UNCATEGORIZED)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _envelope(ErrorCode.UNCATEGORIZED)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderFlowError, handle_orderflow_error)
    app.add_exception_handler(ValidationError, handle_domain_validation_error)
    app.add_exception_handler(InvalidDataError, handle_domain_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_object_not_found)
    app.add_exception_handler(Exception, handle_unexpected_error)
