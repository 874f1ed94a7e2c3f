from sqlalchemy import Column, Integer, String, Boolean
from database.db import Base

# ⚠️ sqlalchemy.orm.Session 과 이름이 겹치지 않도록 AcademicSession 으로 정의
class AcademicSession(Base):
    __tablename__ = "sessions"  # 학년도(학기) 테이블

    id = Column(Integer, primary_key=True, index=True)               # 학년도 고유 ID (PK)
    name = Column(String(50), nullable=False)                        # 학년도 이름 (예: 2025-26)
    is_active = Column(Boolean, nullable=False, default=False)       # 현재 학년도 여부 (동시에 하나만 True)
