from typing import Optional, Annotated
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.admins import Admin as AdminModel
from services.errors import UnauthorizedError
from utils.security import verify_admin_token

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def require_admin(authorization: AuthHeader = None, db: Session = Depends(get_db)) -> Optional[AdminModel]:
    """
    관리자 전용 라우터 보호용 의존성.
    ADMIN_AUTH_REQUIRED가 꺼져 있으면 검사하지 않고 None을 돌려준다.
    """
    if not settings.ADMIN_AUTH_REQUIRED:
        return None

    if not authorization:
        raise UnauthorizedError("Missing Authorization header")

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise UnauthorizedError("Invalid Authorization header format")

    if scheme.lower() != "bearer":
        raise UnauthorizedError("Invalid auth scheme")

    admin_id = verify_admin_token(token)
    if admin_id is None:
        raise UnauthorizedError("Invalid or expired token")

    # 토큰 발급 후 계정이 사라진 경우
    admin = db.get(AdminModel, admin_id)
    if admin is None:
        raise UnauthorizedError("Invalid or expired token")
    return admin
