from typing import Optional
from pydantic import Field
from schemas.common import CamelModel

# ✅ 생성(Create) 요청용
class SessionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)   # 학년도 이름 (예: 2025-26)
    is_active: bool = False                               # 현재 학년도 여부

# ✅ 부분 수정(PATCH) 요청용
class SessionUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    is_active: Optional[bool] = None

# ✅ 응답용
class SessionOut(SessionCreate):
    id: int
