import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.common import ErrorResponse
from services.errors import AppError

logger = logging.getLogger(__name__)

# 요청 위치 접두사 (body.rollNo → rollNo)
_LOC_PREFIXES = ("body", "query", "path", "header", "cookie")


def _error(status_code: int, code: str, message: str, field: Optional[str] = None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, field=field)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


def _field_path(loc) -> Optional[str]:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOC_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or None


def add_error_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error(exc.status_code, exc.code, exc.message, exc.field, headers)

    # 스키마 검증 실패는 422가 아닌 400 + 첫 번째 오류 필드
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {"loc": (), "msg": "Invalid input"}
        return _error(400, "VALIDATION_ERROR", first.get("msg", "Invalid input"), _field_path(first.get("loc", ())))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return _error(exc.status_code, code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("DB 오류: %s %s", request.method, request.url.path)
        return _error(500, "STORE_ERROR", "Database error")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("처리되지 않은 오류: %s %s", request.method, request.url.path)
        return _error(500, "INTERNAL_ERROR", str(exc) or "Internal server error")
