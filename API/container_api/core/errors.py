import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ContainerAPIError(Exception):
    """Base error rendered as ``{"message": ...}`` with ``status_code``."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(ContainerAPIError):
    status_code = 400


class PortConflictError(ContainerAPIError):
    status_code = 400

    def __init__(self, message: str = "Port is already allocated"):
        super().__init__(message)


class RuntimeConnectionError(ContainerAPIError):
    """The Docker engine could not be reached or negotiated with."""

    status_code = 500


class RuntimeOperationError(ContainerAPIError):
    """A Docker engine call failed; ``message`` is the engine's text verbatim."""

    status_code = 500


def error_response(*, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=int(status_code), content={"message": message})


async def container_api_error_handler(_req: Request, exc: ContainerAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("%s: %s", type(exc).__name__, exc.message)
    return error_response(status_code=exc.status_code, message=exc.message)


async def validation_error_handler(_req: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
    return error_response(status_code=400, message=str(message))


async def http_error_handler(_req: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(status_code=exc.status_code, message=str(exc.detail))


async def unhandled_error_handler(_req: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return error_response(status_code=500, message="Internal server error")
