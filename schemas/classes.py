from pydantic import Field
from schemas.common import CamelModel

# ✅ 생성(Create) 요청용 스키마
# → id는 DB에서 자동 생성되므로 제외
class ClassCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)   # 학급 이름
    session_id: int                                        # 소속 학년도 ID


# ✅ 응답(Response) / 조회(Read) 용 스키마
class ClassOut(ClassCreate):
    id: int                                                # 학급 고유 ID (PK)
