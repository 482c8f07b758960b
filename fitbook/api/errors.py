from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitbook.errors import FitbookError
from fitbook.schemas.common import ErrorResponse
from fitbook.settings import get_settings
from fitbook.utils.logging_utils import log


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    # internal details are only exposed while developing
    if status_code >= 500 and not get_settings().IS_DEVELOPMENT:
        error = None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=error).model_dump(
            exclude_none=True
        ),
    )


async def fitbook_error_handler(request: Request, exc: FitbookError):
    return error_response(exc.status_code, exc.message, exc.error)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    log.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request", str(exc.errors())
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(
            exc.status_code, f"Route not found: {request.method} {request.url.path}"
        )
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers is not None:
        response.headers.update(exc.headers)
    return response


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    log.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", str(exc)
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    log.exception(
        f"Unhandled error on {request.method} {request.url.path}", exc_info=exc
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", str(exc)
    )


def register_exception_handlers(api: FastAPI) -> None:
    api.add_exception_handler(FitbookError, fitbook_error_handler)
    api.add_exception_handler(RequestValidationError, request_validation_error_handler)
    api.add_exception_handler(StarletteHTTPException, http_error_handler)
    api.add_exception_handler(SQLAlchemyError, database_error_handler)
    api.add_exception_handler(Exception, unexpected_error_handler)
