from datetime import date as date_type
from typing import Annotated, Optional
from pydantic import BeforeValidator, Field
from schemas.common import CamelModel


def _iso_date(v):
    # "2025-04-01" 형식만 허용 (date 객체가 들어오면 문자열로 변환)
    if v is None:
        return v
    if isinstance(v, date_type):
        return v.isoformat()
    try:
        return date_type.fromisoformat(str(v).strip()).isoformat()
    except ValueError:
        raise ValueError("date must be an ISO date (YYYY-MM-DD)")


IsoDate = Annotated[str, BeforeValidator(_iso_date)]


# ✅ 입력용: POST 요청에서 사용할 스키마
class SubjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)   # 시험 이름
    date: IsoDate                                          # 시험 날짜 (YYYY-MM-DD)
    max_marks: int = Field(..., gt=0)                      # 만점
    class_id: int                                          # 대상 학급 ID


# ✅ 부분 수정(PATCH)용
class SubjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date: Optional[IsoDate] = None
    max_marks: Optional[int] = Field(default=None, gt=0)
    class_id: Optional[int] = None


# ✅ 출력용
# class_id가 None이면 삭제된 과목을 대신하는 placeholder
class SubjectOut(CamelModel):
    id: int
    name: str
    date: str
    max_marks: int
    class_id: Optional[int] = None
