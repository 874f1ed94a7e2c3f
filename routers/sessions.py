from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.common import SuccessResponse
from schemas.sessions import SessionCreate, SessionOut, SessionUpdate
from services import storage

router = APIRouter(prefix="/sessions", tags=["학년도"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 전체 학년도 조회
@router.get("", response_model=List[SessionOut])
def read_sessions(db: Session = Depends(get_db)):
    return storage.get_sessions(db)


# ✅ [CREATE] 학년도 추가
# - isActive=true로 만들면 기존 활성 학년도는 모두 비활성
@router.post("", response_model=SessionOut, status_code=201, dependencies=[Depends(require_admin)])
def create_session(new_session: SessionCreate, db: Session = Depends(get_db)):
    return storage.create_session(db, new_session)


# ==========================================================
# [2단계] 정적 라우터 (/{session_id} 보다 먼저 등록)
# ==========================================================

# ✅ [READ] 현재 활성 학년도 (없으면 null)
@router.get("/active", response_model=Optional[SessionOut])
def read_active_session(db: Session = Depends(get_db)):
    return storage.get_active_session(db)


# ==========================================================
# [3단계] 동적 라우터
# ==========================================================

# ✅ [UPDATE] 학년도 이름/활성 여부 수정
@router.patch("/{session_id}", response_model=SessionOut, dependencies=[Depends(require_admin)])
def update_session(session_id: int, updated: SessionUpdate, db: Session = Depends(get_db)):
    return storage.update_session(db, session_id, updated)


# ✅ [ACTIVATE] 특정 학년도를 활성화 (나머지는 모두 비활성)
@router.post("/{session_id}/active", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def activate_session(session_id: int, db: Session = Depends(get_db)):
    storage.set_active_session(db, session_id)
    return SuccessResponse()
