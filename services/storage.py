"""
services/storage.py

관리자/학년도/학급/학생/과목/점수 CRUD.
- 모든 함수는 첫 번째 인자로 SQLAlchemy Session을 받는다.
- 여러 단계로 이루어진 쓰기(학년도 활성화, 과목 생성 + 0점 생성, 학생 삭제 + 점수 삭제)는
  database.db.transaction 으로 하나의 커밋에 묶는다.
- 없는 id를 수정/삭제하면 NotFoundError.
"""

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database.db import transaction
from models.admins import Admin as AdminModel
from models.classes import Class as ClassModel
from models.marks import Mark as MarkModel
from models.sessions import AcademicSession as SessionModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.admins import AdminCreate
from schemas.classes import ClassCreate
from schemas.marks import MarkUpsert
from schemas.sessions import SessionCreate, SessionUpdate
from schemas.students import MarkWithSubject, StudentCreate, StudentUpdate, StudentWithMarks
from schemas.subjects import SubjectCreate, SubjectOut, SubjectUpdate
from services.errors import ConflictError, NotFoundError, UnauthorizedError
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

# 과목 행이 없어진 점수에 붙이는 대체 과목
UNKNOWN_SUBJECT = SubjectOut(id=0, name="Unknown", date="", max_marks=100, class_id=None)


def _get_or_404(db: Session, model, obj_id: int, label: str):
    obj = db.get(model, obj_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def _apply(obj, values: dict) -> None:
    for key, value in values.items():
        setattr(obj, key, value)


# ==========================================================
# 관리자
# ==========================================================

def get_admin_by_email(db: Session, email: str) -> Optional[AdminModel]:
    return db.query(AdminModel).filter(AdminModel.email == email).first()


def create_admin(db: Session, data: AdminCreate) -> AdminModel:
    if get_admin_by_email(db, data.email) is not None:
        raise ConflictError("Admin already exists", field="email")

    admin = AdminModel(
        email=data.email,
        password=hash_password(data.password),
        name=data.name,
        is_super_admin=data.is_super_admin,
    )
    try:
        with transaction(db):
            db.add(admin)
    except IntegrityError:
        # 동시에 같은 이메일로 생성된 경우 (unique 제약)
        raise ConflictError("Admin already exists", field="email")
    db.refresh(admin)
    return admin


def authenticate_admin(db: Session, email: str, password: str) -> AdminModel:
    admin = get_admin_by_email(db, email)
    # 이메일이 없든 비밀번호가 틀리든 같은 메시지
    if admin is None or not verify_password(password, admin.password):
        raise UnauthorizedError("Invalid credentials")
    return admin


# ==========================================================
# 학년도 (Session)
# ==========================================================

def _deactivate_all(db: Session) -> None:
    db.query(SessionModel).update({SessionModel.is_active: False}, synchronize_session=False)


def get_sessions(db: Session) -> List[SessionModel]:
    return db.query(SessionModel).order_by(SessionModel.id).all()


def create_session(db: Session, data: SessionCreate) -> SessionModel:
    session = SessionModel(**data.model_dump())
    with transaction(db):
        # 새 학년도를 활성으로 만들면 나머지는 모두 비활성
        if session.is_active:
            _deactivate_all(db)
        db.add(session)
    db.refresh(session)
    return session


def update_session(db: Session, session_id: int, data: SessionUpdate) -> SessionModel:
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    with transaction(db):
        session = _get_or_404(db, SessionModel, session_id, "Session")
        if values.get("is_active"):
            _deactivate_all(db)
            db.query(SessionModel).filter(SessionModel.id == session_id).update(
                {SessionModel.is_active: True}, synchronize_session=False
            )
            values.pop("is_active")
        _apply(session, values)
    db.refresh(session)
    return session


def set_active_session(db: Session, session_id: int) -> None:
    with transaction(db):
        _get_or_404(db, SessionModel, session_id, "Session")
        _deactivate_all(db)
        db.query(SessionModel).filter(SessionModel.id == session_id).update(
            {SessionModel.is_active: True}, synchronize_session=False
        )


def get_active_session(db: Session) -> Optional[SessionModel]:
    return db.query(SessionModel).filter(SessionModel.is_active.is_(True)).first()


# ==========================================================
# 학급 (Class)
# ==========================================================

def get_classes(db: Session, session_id: Optional[int] = None) -> List[ClassModel]:
    query = db.query(ClassModel)
    if session_id is not None:
        query = query.filter(ClassModel.session_id == session_id)
    return query.order_by(ClassModel.id).all()


def create_class(db: Session, data: ClassCreate) -> ClassModel:
    _get_or_404(db, SessionModel, data.session_id, "Session")
    cls = ClassModel(**data.model_dump())
    with transaction(db):
        db.add(cls)
    db.refresh(cls)
    return cls


# ==========================================================
# 학생 (Student) + 점수 조인
# ==========================================================

def _with_marks(
    student: StudentModel,
    marks: Iterable[MarkModel],
    subjects_by_id: Dict[int, SubjectModel],
) -> StudentWithMarks:
    items = []
    for mark in marks:
        subject = subjects_by_id.get(mark.subject_id)
        items.append(
            MarkWithSubject(
                id=mark.id,
                student_id=mark.student_id,
                subject_id=mark.subject_id,
                obtained=mark.obtained,
                subject=SubjectOut.model_validate(subject) if subject is not None else UNKNOWN_SUBJECT,
            )
        )
    return StudentWithMarks(
        id=student.id,
        roll_no=student.roll_no,
        name=student.name,
        class_id=student.class_id,
        marks=items,
    )


def _join_marks(db: Session, students: List[StudentModel]) -> List[StudentWithMarks]:
    if not students:
        return []
    student_ids = [s.id for s in students]
    marks = (
        db.query(MarkModel)
        .filter(MarkModel.student_id.in_(student_ids))
        .order_by(MarkModel.id)
        .all()
    )
    subject_ids = list({m.subject_id for m in marks})
    subjects_by_id = {
        s.id: s for s in db.query(SubjectModel).filter(SubjectModel.id.in_(subject_ids)).all()
    } if subject_ids else {}

    marks_by_student: Dict[int, List[MarkModel]] = {sid: [] for sid in student_ids}
    for mark in marks:
        marks_by_student[mark.student_id].append(mark)

    return [_with_marks(s, marks_by_student[s.id], subjects_by_id) for s in students]


def get_students(db: Session, class_id: Optional[int] = None) -> List[StudentWithMarks]:
    """목록 조회는 DB 오류가 나도 빈 목록을 돌려준다 (로그만 남김)."""
    try:
        query = db.query(StudentModel)
        if class_id is not None:
            query = query.filter(StudentModel.class_id == class_id)
        return _join_marks(db, query.order_by(StudentModel.id).all())
    except SQLAlchemyError:
        logger.exception("학생 목록 조회 실패: class_id=%s", class_id)
        db.rollback()
        return []


def get_student(db: Session, student_id: int) -> Optional[StudentWithMarks]:
    student = db.get(StudentModel, student_id)
    if student is None:
        return None
    return _join_marks(db, [student])[0]


def create_student(db: Session, data: StudentCreate) -> StudentModel:
    _get_or_404(db, ClassModel, data.class_id, "Class")
    student = StudentModel(**data.model_dump())
    with transaction(db):
        db.add(student)
    db.refresh(student)
    return student


def update_student(db: Session, student_id: int, data: StudentUpdate) -> StudentModel:
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    student = _get_or_404(db, StudentModel, student_id, "Student")
    if "class_id" in values:
        _get_or_404(db, ClassModel, values["class_id"], "Class")
    with transaction(db):
        _apply(student, values)
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: int) -> None:
    with transaction(db):
        student = _get_or_404(db, StudentModel, student_id, "Student")
        db.query(MarkModel).filter(MarkModel.student_id == student_id).delete(synchronize_session=False)
        db.delete(student)


# ==========================================================
# 과목 (Subject)
# ==========================================================

def get_subjects(db: Session, class_id: Optional[int] = None) -> List[SubjectModel]:
    query = db.query(SubjectModel)
    if class_id is not None:
        query = query.filter(SubjectModel.class_id == class_id)
    return query.order_by(SubjectModel.id).all()


def create_subject(db: Session, data: SubjectCreate) -> SubjectModel:
    """과목을 만들고 현재 등록된 모든 학생에게 0점 점수 행을 만들어 둔다."""
    _get_or_404(db, ClassModel, data.class_id, "Class")
    subject = SubjectModel(**data.model_dump())
    with transaction(db):
        db.add(subject)
        db.flush()  # subject.id 확보
        student_ids = [row.id for row in db.query(StudentModel.id).all()]
        db.add_all(
            MarkModel(student_id=sid, subject_id=subject.id, obtained="0")
            for sid in student_ids
        )
    db.refresh(subject)
    logger.info("과목 생성: id=%s, 0점 점수 %d건 생성", subject.id, len(student_ids))
    return subject


def update_subject(db: Session, subject_id: int, data: SubjectUpdate) -> SubjectModel:
    values = data.model_dump(exclude_unset=True, exclude_none=True)
    subject = _get_or_404(db, SubjectModel, subject_id, "Subject")
    if "class_id" in values:
        _get_or_404(db, ClassModel, values["class_id"], "Class")
    with transaction(db):
        _apply(subject, values)
    db.refresh(subject)
    return subject


def delete_subject(db: Session, subject_id: int) -> None:
    with transaction(db):
        subject = _get_or_404(db, SubjectModel, subject_id, "Subject")
        db.query(MarkModel).filter(MarkModel.subject_id == subject_id).delete(synchronize_session=False)
        db.delete(subject)


# ==========================================================
# 점수 (Mark)
# ==========================================================

def get_marks(db: Session, student_id: Optional[int] = None, subject_id: Optional[int] = None) -> List[MarkModel]:
    query = db.query(MarkModel)
    if student_id is not None:
        query = query.filter(MarkModel.student_id == student_id)
    if subject_id is not None:
        query = query.filter(MarkModel.subject_id == subject_id)
    return query.order_by(MarkModel.id).all()


def _upsert_mark(db: Session, student_id: int, subject_id: int, obtained: str) -> MarkModel:
    _get_or_404(db, StudentModel, student_id, "Student")
    _get_or_404(db, SubjectModel, subject_id, "Subject")

    existing = (
        db.query(MarkModel)
        .filter(MarkModel.student_id == student_id, MarkModel.subject_id == subject_id)
        .first()
    )
    if existing is not None:
        existing.obtained = obtained
        return existing

    mark = MarkModel(student_id=student_id, subject_id=subject_id, obtained=obtained)
    db.add(mark)
    # 같은 요청 안에서 같은 쌍이 다시 나오면 위 조회에 걸리도록 flush
    db.flush()
    return mark


def update_mark(db: Session, student_id: int, subject_id: int, obtained: str) -> MarkModel:
    with transaction(db):
        mark = _upsert_mark(db, student_id, subject_id, obtained)
    db.refresh(mark)
    return mark


def update_marks(db: Session, entries: Iterable[MarkUpsert]) -> List[MarkModel]:
    """여러 점수를 한 트랜잭션으로 저장. 하나라도 실패하면 전부 롤백."""
    with transaction(db):
        marks = [_upsert_mark(db, e.student_id, e.subject_id, e.obtained) for e in entries]
    for mark in marks:
        db.refresh(mark)
    return marks
