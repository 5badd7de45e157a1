"""错误响应 -- 统一 {"error": {"code", "message"}} 格式

- CollaboratorError -> 502 COLLABORATOR_ERROR
- pydantic.ValidationError -> 422 VALIDATION_ERROR
- 资源不存在 -> 404
"""

import structlog
from appkit.provider import CollaboratorError
from fastapi import FastAPI, Request
from pydantic import ValidationError
from starlette.responses import JSONResponse

log = structlog.get_logger()


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def not_found(code: str, message: str) -> JSONResponse:
    return error_response(404, code, message)


async def collaborator_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """collaborator 失败转为可恢复的 502"""
    recoverable = getattr(exc, "recoverable", True)
    log.warning(
        "collaborator_error",
        error=str(exc),
        error_type=type(exc).__name__,
        recoverable=recoverable,
    )
    return error_response(502, "COLLABORATOR_ERROR", str(exc))


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """业务层模型校验失败（如 PATCH 非法取值）转为 422"""
    return error_response(422, "VALIDATION_ERROR", str(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CollaboratorError, collaborator_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
