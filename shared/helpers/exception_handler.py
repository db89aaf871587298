import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from shared.core.exceptions import ConsoleError, Unauthenticated
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def failure_body(status_code: str, message: str) -> dict:
    return JsonOutResult(
        data=None,
        status="Failure",
        status_code=str(status_code),
        message=message
    ).model_dump()


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(ConsoleError)
    async def console_error_handler(request: Request, exc: ConsoleError):
        headers = None
        if isinstance(exc, Unauthenticated):
            # tells the client to discard its cached token
            headers = {"WWW-Authenticate": 'Bearer error="invalid_token"'}
        return JSONResponse(
            content=failure_body(exc.app_status_code, exc.message),
            status_code=exc.http_status,
            headers=headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail):
            content = exc.detail
        else:
            content = failure_body(AppStatusCode.OPERATION_FAILED, str(exc.detail))
        return JSONResponse(content=content, status_code=exc.status_code or 400,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content=failure_body(AppStatusCode.INVALID_INPUT, str(exc.errors())),
            status_code=422,
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            content=failure_body(AppStatusCode.OPERATION_FAILED, "Internal server error"),
            status_code=500,
        )
