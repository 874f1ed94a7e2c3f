from contextlib import contextmanager

from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import Session, sessionmaker   # 세션 팩토리 함수

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기


def _engine_kwargs(url: str) -> dict:
    # SQLite는 요청 스레드와 생성 스레드가 다를 수 있으므로 체크 해제
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


# ✅ 설정의 DB URL로 엔진 생성
engine = create_engine(settings.DB_URL, echo=settings.SQL_ECHO, **_engine_kwargs(settings.DB_URL))

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ==========================================================
# [공통] DB 세션 관리
# - 모든 요청에서 DB 연결을 생성하고 종료
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """여러 단계의 쓰기를 하나의 커밋으로 묶는다. 실패하면 전부 롤백."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db(bind=None):
    """모든 모델을 등록한 뒤 테이블 생성 (이미 있으면 건너뜀)"""
    # 테이블 메타데이터 등록용 import
    import models.admins, models.sessions, models.classes  # noqa: F401
    import models.students, models.subjects, models.marks  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
