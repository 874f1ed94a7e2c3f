from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.students import (
    RankedStudent, StudentCreate, StudentOut, StudentReport, StudentUpdate, StudentWithMarks,
)
from services import ranking, storage
from services.errors import NotFoundError

router = APIRouter(prefix="/students", tags=["학생 정보"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 학생 목록 (점수 + 과목 포함)
# - classId를 주면 해당 반만
@router.get("", response_model=List[StudentWithMarks])
def read_students(class_id: Optional[int] = Query(default=None, alias="classId"), db: Session = Depends(get_db)):
    return storage.get_students(db, class_id)


# ✅ [CREATE] 학생 추가
@router.post("", response_model=StudentOut, status_code=201, dependencies=[Depends(require_admin)])
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    return storage.create_student(db, student)


# ==========================================================
# [2단계] 정적 라우터 (리더보드)
# ==========================================================

# ✅ [LEADERBOARD] 백분율 순위
# - search(이름/출석번호)로 먼저 거른 뒤 보이는 학생들끼리 순위를 매김
@router.get("/leaderboard", response_model=List[RankedStudent])
def read_leaderboard(
    class_id: Optional[int] = Query(default=None, alias="classId"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return ranking.rank_students(storage.get_students(db, class_id), search)


# ==========================================================
# [3단계] 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

def _student_or_404(db: Session, student_id: int) -> StudentWithMarks:
    student = storage.get_student(db, student_id)
    if student is None:
        raise NotFoundError("Student not found")
    return student


# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}", response_model=StudentWithMarks)
def read_student(student_id: int, db: Session = Depends(get_db)):
    return _student_or_404(db, student_id)


# ✅ [SUMMARY] 특정 학생 성적표 (합계/백분율/등급)
@router.get("/{student_id}/report", response_model=StudentReport)
def read_student_report(student_id: int, db: Session = Depends(get_db)):
    return ranking.build_report(_student_or_404(db, student_id))


# ✅ [UPDATE] 특정 학생 정보 수정 (보낸 필드만)
@router.patch("/{student_id}", response_model=StudentOut, dependencies=[Depends(require_admin)])
def update_student(student_id: int, updated: StudentUpdate, db: Session = Depends(get_db)):
    return storage.update_student(db, student_id, updated)


# ✅ [DELETE] 특정 학생 삭제 (점수도 함께 삭제)
@router.delete("/{student_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_student(student_id: int, db: Session = Depends(get_db)):
    storage.delete_student(db, student_id)
    return Response(status_code=204)
