from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.errors import (
    InvalidTaskIdError,
    InvalidTaskUpdateError,
    StorageError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Invalid request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(400, "Invalid input")


async def _invalid_task_id(request: Request, exc: InvalidTaskIdError) -> JSONResponse:
    return error_response(400, "Invalid task id")


async def _invalid_task_update(request: Request, exc: InvalidTaskUpdateError) -> JSONResponse:
    return error_response(400, str(exc))


async def _task_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return error_response(404, "Task not found")


async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
    # детали драйвера только в логе
    logger.error(
        "Storage failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return error_response(500, "Internal server error")


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(500, "Internal server error")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Единая точка перевода доменных ошибок в HTTP-ответы вида {"error": "..."}.
    """
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(InvalidTaskIdError, _invalid_task_id)
    app.add_exception_handler(InvalidTaskUpdateError, _invalid_task_update)
    app.add_exception_handler(TaskNotFoundError, _task_not_found)
    app.add_exception_handler(StorageError, _storage_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
