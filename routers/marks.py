from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.marks import MarkBulkUpsert, MarkOut, MarkUpsert
from services import storage

router = APIRouter(prefix="/marks", tags=["점수"])


# ✅ [READ] 점수 조회 (studentId / subjectId 필터)
@router.get("", response_model=List[MarkOut])
def read_marks(
    student_id: Optional[int] = Query(default=None, alias="studentId"),
    subject_id: Optional[int] = Query(default=None, alias="subjectId"),
    db: Session = Depends(get_db),
):
    return storage.get_marks(db, student_id, subject_id)


# ✅ [UPSERT] 점수 저장
# - (studentId, subjectId) 점수가 있으면 수정, 없으면 추가
@router.post("", response_model=MarkOut, dependencies=[Depends(require_admin)])
def upsert_mark(mark: MarkUpsert, db: Session = Depends(get_db)):
    return storage.update_mark(db, mark.student_id, mark.subject_id, mark.obtained)


# ✅ [UPSERT] 여러 점수를 한 번에 저장 (전부 성공하거나 전부 실패)
@router.post("/bulk", response_model=List[MarkOut], dependencies=[Depends(require_admin)])
def upsert_marks(payload: MarkBulkUpsert, db: Session = Depends(get_db)):
    return storage.update_marks(db, payload.marks)
