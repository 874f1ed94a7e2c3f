from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from schemas.admins import AdminCreate, AdminLogin, AdminLoginOut, AdminOut
from services import storage
from utils.security import create_admin_token

router = APIRouter(prefix="/admin", tags=["관리자"])


# ✅ [LOGIN] 관리자 로그인
# - 성공: 비밀번호를 뺀 관리자 정보 + 서명된 토큰
# - 실패: 401 (이메일/비밀번호 중 무엇이 틀렸는지 알려주지 않음)
@router.post("/login", response_model=AdminLoginOut)
def login(request: AdminLogin, db: Session = Depends(get_db)):
    admin = storage.authenticate_admin(db, request.email, request.password)
    out = AdminOut.model_validate(admin)
    return AdminLoginOut(**out.model_dump(), token=create_admin_token(admin.id))


# ✅ [CREATE] 관리자 추가
# - 이미 등록된 이메일이면 400
@router.post("/create", response_model=AdminOut, status_code=201, dependencies=[Depends(require_admin)])
def create_admin(new_admin: AdminCreate, db: Session = Depends(get_db)):
    return storage.create_admin(db, new_admin)
