from typing import List, Optional
from pydantic import Field
from schemas.common import CamelModel
from schemas.marks import MarkOut
from schemas.subjects import SubjectOut

# ✅ 입력용 (POST)
class StudentCreate(CamelModel):
    roll_no: int                                           # 출석 번호
    name: str = Field(..., min_length=1, max_length=100)   # 학생 이름
    class_id: int                                          # 소속 반 ID

# ✅ 부분 수정용 (PATCH)
class StudentUpdate(CamelModel):
    roll_no: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    class_id: Optional[int] = None

# ✅ 전체 출력용 (GET, 상세조회 등)
class StudentOut(StudentCreate):
    id: int


# ✅ 점수 + 과목 정보가 붙은 점수
class MarkWithSubject(MarkOut):
    subject: SubjectOut

# ✅ 학생 + 점수 목록 (저장되지 않는 조회용 뷰)
class StudentWithMarks(StudentOut):
    marks: List[MarkWithSubject] = []


# ✅ 합계/백분율
class StudentTotals(CamelModel):
    total_obtained: float
    total_max: int
    percentage: float

# ✅ 리더보드 한 줄
class RankedStudent(StudentTotals):
    rank: int                     # 1부터 시작하는 순위
    tier: str                     # gold / silver / bronze / top10 / standard
    student: StudentWithMarks

# ✅ 과목별 결과 (성적표 한 줄)
class MarkResult(CamelModel):
    subject_id: int
    subject_name: str
    obtained: float
    max_marks: int
    percentage: float
    passed: bool                  # 과목 백분율 33% 이상이면 합격

# ✅ 학생 성적표 (상세 화면)
class StudentReport(StudentTotals):
    band: str                     # good / average / poor
    results: List[MarkResult] = []
    student: StudentWithMarks
