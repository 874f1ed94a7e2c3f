from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # 과목(시험) 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                               # 과목 고유 ID (Primary Key)
    name = Column(String(100), nullable=False)                                       # 시험 이름 (예: Initial Test)
    date = Column(String(10), nullable=False)                                        # 시험 날짜 (ISO 문자열, YYYY-MM-DD)
    max_marks = Column(Integer, nullable=False)                                      # 만점
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True) # 대상 학급 ID
