"""
services/errors.py

서비스 계층에서 발생시키는 예외 모음.
라우터는 이 예외를 그대로 올려 보내고, middlewares/error_handler.py가
status_code/code를 보고 표준 에러 응답으로 변환한다.
"""

from typing import Optional


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


# 중복 관리자 이메일 등: 기존 클라이언트 호환을 위해 409가 아닌 400
class ConflictError(AppError):
    status_code = 400
    code = "CONFLICT"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
