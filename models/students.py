from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                               # 고유 학생 ID (Primary Key)
    roll_no = Column(Integer, nullable=False)                                        # 출석 번호 (전체에서 유일하지 않음)
    name = Column(String(100), nullable=False)                                       # 학생 이름
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True) # 소속 반 ID
