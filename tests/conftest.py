import os

# 앱 모듈을 import 하기 전에 테스트용 설정 주입
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import settings
from database.db import Base, get_db, init_db
from main import app


@pytest.fixture
def engine():
    # 모든 연결이 같은 인메모리 DB를 보도록 StaticPool 사용
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_auth(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_AUTH_REQUIRED", True)


@pytest.fixture
def school(client):
    """활성 학년도 1개 + 학급 1개"""
    session = client.post("/api/sessions", json={"name": "2025-26", "isActive": True}).json()
    cls = client.post("/api/classes", json={"name": "Standard 10", "sessionId": session["id"]}).json()
    return {"session": session, "class": cls}
