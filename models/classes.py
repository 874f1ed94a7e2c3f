from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(100), nullable=False)              # 학급 이름 (예: Standard 10)

    # ✅ 소속 학년도 ID (FK)
    #    - sessions.id를 참조
    #    - 한 학년도는 여러 학급을 가질 수 있음 (1:N)
    session_id = Column(Integer, ForeignKey("sessions.id"), nullable=False, index=True)
