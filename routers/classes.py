from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.classes import ClassCreate, ClassOut
from services import storage

router = APIRouter(prefix="/classes", tags=["학급"])


# ✅ [READ] 학급 목록 조회
# - sessionId를 주면 해당 학년도의 학급만
@router.get("", response_model=List[ClassOut])
def read_classes(session_id: Optional[int] = Query(default=None, alias="sessionId"), db: Session = Depends(get_db)):
    return storage.get_classes(db, session_id)


# ✅ [CREATE] 학급 추가
# - 예: 2025-26 학년도에 Standard 10 등록
@router.post("", response_model=ClassOut, status_code=201, dependencies=[Depends(require_admin)])
def create_class(new_class: ClassCreate, db: Session = Depends(get_db)):
    return storage.create_class(db, new_class)
