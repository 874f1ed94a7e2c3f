"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) camelCase 입출력 베이스: CamelModel
  2) 에러 응답 표준: ErrorResponse
  3) 단순 성공 응답: SuccessResponse
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =========================================================
# 1) camelCase 베이스
# =========================================================

class CamelModel(BaseModel):
    """
    프론트엔드는 camelCase(rollNo, classId ...)로 주고받고,
    파이썬/DB 쪽은 snake_case를 그대로 사용한다.
    - 요청: 두 표기 모두 허용 (populate_by_name)
    - 응답: FastAPI가 alias(camelCase)로 직렬화
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


# =========================================================
# 2) 에러 응답 표준
# =========================================================

class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - message: 사람이 읽을 수 있는 메시지 (프론트 토스트에 그대로 표시)
    - code: 에러 식별 코드 (예: VALIDATION_ERROR, NOT_FOUND)
    - field: 검증 실패 필드 경로 (예: "rollNo", "marks.0.obtained")
    """
    message: str
    code: str = Field(..., description="에러 식별 코드")
    field: Optional[str] = None
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 3) 단순 성공 응답
# =========================================================

class SuccessResponse(BaseModel):
    success: bool = True
