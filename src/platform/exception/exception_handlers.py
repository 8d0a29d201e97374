from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, CustomBaseError):
        return await unhandled_error_handler(request, exc)
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_content(), headers=exc.headers()
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    # ctx may carry the raw exception object, which is not JSON serializable
    detail = [
        {key: value for key, value in item.items() if key in ('type', 'loc', 'msg')}
        for item in errors
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Already logged with traceback when it crossed a Logger.io boundary
    if not getattr(exc, '_has_logged', False):
        Logger.base.opt(exception=exc).error(
            f'💥 [HTTP] {request.method} {request.url.path} failed: {type(exc).__name__}'
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
