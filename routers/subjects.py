from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.subjects import SubjectCreate, SubjectOut, SubjectUpdate
from services import storage

router = APIRouter(prefix="/subjects", tags=["과목(시험) 정보"])


# ✅ [CREATE] 과목 추가
# - 등록된 모든 학생에게 0점 점수 행이 함께 생성됨
@router.post("", response_model=SubjectOut, status_code=201, dependencies=[Depends(require_admin)])
def create_subject(subject: SubjectCreate, db: Session = Depends(get_db)):
    return storage.create_subject(db, subject)


# ✅ [READ] 과목 목록 (classId로 필터 가능)
@router.get("", response_model=List[SubjectOut])
def read_subjects(class_id: Optional[int] = Query(default=None, alias="classId"), db: Session = Depends(get_db)):
    return storage.get_subjects(db, class_id)


# ✅ [UPDATE] 과목 정보 수정
@router.patch("/{subject_id}", response_model=SubjectOut, dependencies=[Depends(require_admin)])
def update_subject(subject_id: int, updated: SubjectUpdate, db: Session = Depends(get_db)):
    return storage.update_subject(db, subject_id, updated)


# ✅ [DELETE] 과목 삭제 (해당 과목 점수도 함께 삭제)
@router.delete("/{subject_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    storage.delete_subject(db, subject_id)
    return Response(status_code=204)
