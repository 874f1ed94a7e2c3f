from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db

router = APIRouter(tags=["Meta"])


# ✅ 헬스체크 (DB 연결 포함)
@router.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.APP_VERSION}
