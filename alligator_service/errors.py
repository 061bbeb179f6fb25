"""
Error taxonomy and the FastAPI handlers that turn it into HTTP responses
"""
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AlligatorError(Exception):
    """Base class for errors raised by the services"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(AlligatorError):
    """Malformed or conflicting input"""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AlligatorError):
    """Bad credentials or a missing/invalid token

    Token failures carry no message and are answered with an empty body.
    """

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AlligatorError):
    """Referenced user or post does not exist"""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AlligatorError):
    """Backing store or media directory failure"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def alligator_error_handler(request: Request, exc: AlligatorError) -> Response:
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    elif isinstance(exc, AuthError):
        logger.warning("%s %s forbidden", request.method, request.url.path)

    if not exc.message:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to an application"""
    app.add_exception_handler(AlligatorError, alligator_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
