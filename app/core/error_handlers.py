import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import GradebookError, MalformedInputError, failure_envelope

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    @app.exception_handler(GradebookError)
    async def gradebook_error_handler(request: Request, exc: GradebookError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=failure_envelope(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # body missing, not JSON, or not an object
        first = exc.errors()[0] if exc.errors() else {}
        message = first.get("msg", "Malformed request")
        return JSONResponse(status_code=400, content=failure_envelope(MalformedInputError(message)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=failure_envelope(exc))
