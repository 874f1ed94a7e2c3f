from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import SessionLocal, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# HTTP/DB 라이브러리 디버그 로그 비활성화
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import admin, classes, marks, meta, sessions, students, subjects

from services.seed import seed_database

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정 (프론트엔드 연동)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /api 프리픽스 라우터 등록
app.include_router(admin.router,     prefix="/api")
app.include_router(sessions.router,  prefix="/api")
app.include_router(classes.router,   prefix="/api")
app.include_router(students.router,  prefix="/api")
app.include_router(subjects.router,  prefix="/api")
app.include_router(marks.router,     prefix="/api")

# ✅ 헬스체크 엔드포인트
app.include_router(meta.router)


@app.on_event("startup")
def _prepare_database():
    init_db()
    if not settings.SEED_ON_STARTUP:
        return
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
