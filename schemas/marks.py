import math
from typing import List
from pydantic import Field, field_validator
from schemas.common import CamelModel

# ✅ 점수 입력 (upsert)
# obtained는 숫자/숫자 문자열 모두 받아서 문자열로 저장
class MarkUpsert(CamelModel):
    student_id: int
    subject_id: int
    obtained: str

    @field_validator("obtained", mode="before")
    @classmethod
    def _to_text(cls, v):
        if isinstance(v, bool) or not isinstance(v, (str, int, float)):
            raise ValueError("obtained must be a number or numeric string")
        text = str(v).strip()
        try:
            number = float(text)
        except ValueError:
            raise ValueError("obtained must be a number or numeric string")
        if not math.isfinite(number):
            raise ValueError("obtained must be a finite number")
        return text


# ✅ 여러 점수를 한 번에 저장 (한 트랜잭션)
class MarkBulkUpsert(CamelModel):
    marks: List[MarkUpsert] = Field(..., min_length=1)


# ✅ 응답용
class MarkOut(CamelModel):
    id: int
    student_id: int
    subject_id: int
    obtained: str
