from sqlalchemy import Column, Integer, String, Boolean
from database.db import Base

class Admin(Base):
    __tablename__ = "admins"  # 관리자 계정 테이블

    id = Column(Integer, primary_key=True, index=True)               # 관리자 고유 ID (PK)
    email = Column(String(255), unique=True, nullable=False)         # 로그인 이메일 (중복 불가)
    password = Column(String(255), nullable=False)                   # 비밀번호 해시 (평문 저장 금지)
    name = Column(String(100), nullable=False)                       # 관리자 이름
    is_super_admin = Column(Boolean, nullable=False, default=False)  # 최고 관리자 여부
