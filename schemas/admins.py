from typing import Annotated
from pydantic import BeforeValidator, Field, field_validator
from schemas.common import CamelModel


def _strip(v):
    return v.strip() if isinstance(v, str) else v


# 생성/로그인 모두 앞뒤 공백을 제거한 이메일로 비교
AdminEmail = Annotated[str, BeforeValidator(_strip)]


# ✅ 관리자 생성 요청
class AdminCreate(CamelModel):
    email: AdminEmail = Field(..., min_length=3, max_length=255)   # 로그인 이메일
    password: str = Field(..., min_length=1)                       # 평문 비밀번호 (저장 전 해시)
    name: str = Field(..., min_length=1, max_length=100)           # 관리자 이름
    is_super_admin: bool = False                                   # 최고 관리자 여부

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


# ✅ 로그인 요청
class AdminLogin(CamelModel):
    email: AdminEmail
    password: str


# ✅ 응답용 (비밀번호 필드 없음)
class AdminOut(CamelModel):
    id: int
    email: str
    name: str
    is_super_admin: bool


# ✅ 로그인 응답: 관리자 정보 + 서명된 토큰
class AdminLoginOut(AdminOut):
    token: str
