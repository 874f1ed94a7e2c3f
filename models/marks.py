from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Mark(Base):
    __tablename__ = "marks"  # 학생별 시험 점수 테이블

    id = Column(Integer, primary_key=True, index=True)                                  # 점수 고유 ID
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True) # 학생 ID
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True) # 과목 ID
    # 받은 점수 (문자열로 저장, 집계 시 숫자로 변환)
    # (student_id, subject_id) 당 하나만 존재하도록 upsert로 관리
    obtained = Column(String(20), nullable=False, default="0")
