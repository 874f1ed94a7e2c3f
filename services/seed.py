"""
services/seed.py

서버 시작 시 한 번 실행하는 초기 데이터 생성.
이미 있는 데이터는 건드리지 않으므로 여러 번 실행해도 결과가 같다.
- 기본 관리자 (SEED_ADMIN_* 설정)
- 학년도가 하나도 없으면: 활성 학년도 "2025-26" + 학급 "Standard 10"
- 학생이 하나도 없으면: "Initial Test"(만점 80) + 기본 명단과 점수
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from config.settings import settings
from models.students import Student as StudentModel
from schemas.admins import AdminCreate
from schemas.classes import ClassCreate
from schemas.sessions import SessionCreate
from schemas.students import StudentCreate
from schemas.subjects import SubjectCreate
from services import storage

logger = logging.getLogger(__name__)

DEFAULT_SESSION_NAME = "2025-26"
DEFAULT_CLASS_NAME = "Standard 10"
INITIAL_TEST_NAME = "Initial Test"
INITIAL_TEST_MAX = 80

# (출석번호, 이름, 받은 점수)
SEED_STUDENTS = [
    (1, "Aakash Yadav", 54), (2, "Aryan Kumar", 51), (3, "Rahul Kumar", 70),
    (4, "Aman Kumar", 46), (5, "Prince Kumar", 0), (6, "Faiz Raza", 58),
    (7, "Meraj Alam", 0), (8, "Afroz", 0), (9, "Ismail", 0),
    (10, "Khusboo", 62), (11, "Salma Parveen", 0), (12, "Aaisha Khatoon", 49),
    (13, "Sahima", 0), (14, "Aashiya", 45), (15, "Shanzida", 36),
    (16, "Maimuna", 68), (17, "Soha", 56), (18, "Naziya (U)", 58),
    (19, "Jashmin", 56), (20, "Usha Kumari", 38), (21, "Gungun", 54),
    (22, "Naziya (D)", 45), (23, "Shahina Khatoon", 60), (24, "Sonam Kumari", 40),
    (25, "Farzana", 65), (26, "Muskan Khatoon", 53), (27, "Sabina", 60),
    (28, "Farhin", 0), (29, "Sanaa Parveen", 66), (30, "Rani Parveen", 56),
    (31, "Gulafsa", 68), (32, "Sajiya Khatoon", 54), (33, "Amarjit Kumar", 47),
    (34, "Prince Yadav", 21), (35, "Tabrez", 41), (36, "Faiz", 0),
    (37, "Muskan II", 0), (38, "Tahir", 40), (39, "Anshu Kumari", 0),
]


def seed_admin(db: Session) -> None:
    if storage.get_admin_by_email(db, settings.SEED_ADMIN_EMAIL) is not None:
        return
    logger.info("기본 관리자 생성: %s", settings.SEED_ADMIN_EMAIL)
    storage.create_admin(db, AdminCreate(
        email=settings.SEED_ADMIN_EMAIL,
        password=settings.SEED_ADMIN_PASSWORD,
        name=settings.SEED_ADMIN_NAME,
        is_super_admin=True,
    ))


def seed_session(db: Session) -> None:
    if storage.get_sessions(db):
        return
    logger.info("기본 학년도/학급 생성: %s / %s", DEFAULT_SESSION_NAME, DEFAULT_CLASS_NAME)
    session = storage.create_session(db, SessionCreate(name=DEFAULT_SESSION_NAME, is_active=True))
    storage.create_class(db, ClassCreate(name=DEFAULT_CLASS_NAME, session_id=session.id))


def seed_students(db: Session) -> None:
    if db.query(StudentModel.id).first() is not None:
        return

    # 활성 학년도의 첫 번째 학급에 명단을 넣는다
    active = storage.get_active_session(db)
    classes = storage.get_classes(db, active.id if active else None)
    if not classes:
        logger.warning("학급이 없어 학생 초기 데이터를 건너뜀")
        return
    class_id = classes[0].id

    logger.info("학생 초기 데이터 생성: class_id=%s, %d명", class_id, len(SEED_STUDENTS))
    subject = storage.create_subject(db, SubjectCreate(
        name=INITIAL_TEST_NAME,
        date=date.today().isoformat(),
        max_marks=INITIAL_TEST_MAX,
        class_id=class_id,
    ))
    for roll_no, name, obtained in SEED_STUDENTS:
        student = storage.create_student(db, StudentCreate(roll_no=roll_no, name=name, class_id=class_id))
        storage.update_mark(db, student.id, subject.id, str(obtained))
    logger.info("학생 초기 데이터 생성 완료")


def seed_database(db: Session) -> None:
    seed_admin(db)
    seed_session(db)
    seed_students(db)
