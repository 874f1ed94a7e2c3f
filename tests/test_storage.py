import pytest
from sqlalchemy.exc import SQLAlchemyError

from models.admins import Admin as AdminModel
from models.marks import Mark as MarkModel
from models.sessions import AcademicSession as SessionModel
from schemas.admins import AdminCreate
from schemas.classes import ClassCreate
from schemas.marks import MarkUpsert
from schemas.sessions import SessionCreate, SessionUpdate
from schemas.students import StudentCreate, StudentUpdate
from schemas.subjects import SubjectCreate, SubjectUpdate
from services import storage
from services.errors import ConflictError, NotFoundError, UnauthorizedError


@pytest.fixture
def cls(db):
    session = storage.create_session(db, SessionCreate(name="2025-26", is_active=True))
    return storage.create_class(db, ClassCreate(name="Standard 10", session_id=session.id))


def add_student(db, cls, roll_no, name):
    return storage.create_student(db, StudentCreate(roll_no=roll_no, name=name, class_id=cls.id))


def add_subject(db, cls, name="Unit Test", max_marks=80):
    return storage.create_subject(
        db, SubjectCreate(name=name, date="2025-04-01", max_marks=max_marks, class_id=cls.id)
    )


def active_count(db):
    return db.query(SessionModel).filter(SessionModel.is_active.is_(True)).count()


# ==========================================================
# 관리자
# ==========================================================

def test_create_admin_hashes_password(db):
    admin = storage.create_admin(db, AdminCreate(email="a@school.local", password="pw123", name="A"))
    assert admin.password != "pw123"
    assert storage.authenticate_admin(db, "a@school.local", "pw123").id == admin.id


def test_create_admin_duplicate_email(db):
    storage.create_admin(db, AdminCreate(email="a@school.local", password="pw", name="A"))
    with pytest.raises(ConflictError):
        storage.create_admin(db, AdminCreate(email="a@school.local", password="other", name="B"))


def test_create_admin_unique_constraint_is_conflict(db, monkeypatch):
    storage.create_admin(db, AdminCreate(email="a@school.local", password="pw", name="A"))
    # 사전 조회를 통과한 두 요청이 동시에 insert 하는 상황
    monkeypatch.setattr(storage, "get_admin_by_email", lambda db, email: None)

    with pytest.raises(ConflictError):
        storage.create_admin(db, AdminCreate(email="a@school.local", password="other", name="B"))

    assert db.query(AdminModel).count() == 1


@pytest.mark.parametrize("email, password", [("a@school.local", "wrong"), ("nobody@school.local", "pw")])
def test_authenticate_admin_rejects(db, email, password):
    storage.create_admin(db, AdminCreate(email="a@school.local", password="pw", name="A"))
    with pytest.raises(UnauthorizedError):
        storage.authenticate_admin(db, email, password)


# ==========================================================
# 학년도
# ==========================================================

def test_set_active_session_leaves_exactly_one(db):
    sessions = [storage.create_session(db, SessionCreate(name=f"202{i}", is_active=False)) for i in range(4)]
    db.query(SessionModel).update({SessionModel.is_active: True})
    db.commit()

    storage.set_active_session(db, sessions[2].id)

    assert active_count(db) == 1
    assert storage.get_active_session(db).id == sessions[2].id


def test_set_active_session_on_already_active(db):
    first = storage.create_session(db, SessionCreate(name="2024-25", is_active=True))
    storage.create_session(db, SessionCreate(name="2025-26"))
    storage.set_active_session(db, first.id)
    assert storage.get_active_session(db).id == first.id
    assert active_count(db) == 1


def test_set_active_session_missing_keeps_current(db):
    current = storage.create_session(db, SessionCreate(name="2025-26", is_active=True))
    with pytest.raises(NotFoundError):
        storage.set_active_session(db, 999)
    assert storage.get_active_session(db).id == current.id


def test_create_active_session_deactivates_others(db):
    storage.create_session(db, SessionCreate(name="2024-25", is_active=True))
    newer = storage.create_session(db, SessionCreate(name="2025-26", is_active=True))
    assert active_count(db) == 1
    assert storage.get_active_session(db).id == newer.id


def test_update_session(db):
    old = storage.create_session(db, SessionCreate(name="2024-25", is_active=True))
    other = storage.create_session(db, SessionCreate(name="2025"))

    renamed = storage.update_session(db, other.id, SessionUpdate(name="2025-26", is_active=True))

    assert renamed.name == "2025-26"
    assert renamed.is_active is True
    db.refresh(old)
    assert old.is_active is False
    with pytest.raises(NotFoundError):
        storage.update_session(db, 999, SessionUpdate(name="x"))


# ==========================================================
# 학급
# ==========================================================

def test_get_classes_filtered_by_session(db):
    s1 = storage.create_session(db, SessionCreate(name="2024-25"))
    s2 = storage.create_session(db, SessionCreate(name="2025-26"))
    storage.create_class(db, ClassCreate(name="Std 9", session_id=s1.id))
    storage.create_class(db, ClassCreate(name="Std 10", session_id=s2.id))

    assert [c.name for c in storage.get_classes(db, s2.id)] == ["Std 10"]
    assert len(storage.get_classes(db)) == 2


def test_create_class_unknown_session(db):
    with pytest.raises(NotFoundError):
        storage.create_class(db, ClassCreate(name="Std 10", session_id=42))


# ==========================================================
# 학생 / 과목 / 점수
# ==========================================================

def test_create_subject_seeds_zero_marks(db, cls):
    students = [add_student(db, cls, i, f"Student {i}") for i in (1, 2, 3)]
    subject = add_subject(db, cls)

    listed = storage.get_students(db, cls.id)
    assert len(listed) == 3
    for student in listed:
        assert [(m.subject_id, m.obtained) for m in student.marks] == [(subject.id, "0")]
        assert student.marks[0].subject.max_marks == 80
    assert {s.id for s in listed} == {s.id for s in students}


def test_create_subject_without_students(db, cls):
    subject = add_subject(db, cls)
    assert storage.get_marks(db, subject_id=subject.id) == []


def test_student_added_after_subject_has_no_mark(db, cls):
    add_subject(db, cls)
    late = add_student(db, cls, 9, "Late")
    assert storage.get_student(db, late.id).marks == []


def test_delete_student_removes_marks(db, cls):
    student = add_student(db, cls, 1, "A")
    add_subject(db, cls, "T1")
    add_subject(db, cls, "T2")
    assert len(storage.get_marks(db, student_id=student.id)) == 2

    storage.delete_student(db, student.id)

    assert storage.get_student(db, student.id) is None
    assert db.query(MarkModel).filter(MarkModel.student_id == student.id).count() == 0
    with pytest.raises(NotFoundError):
        storage.delete_student(db, student.id)


def test_delete_subject_removes_marks(db, cls):
    add_student(db, cls, 1, "A")
    subject = add_subject(db, cls)
    storage.delete_subject(db, subject.id)
    assert storage.get_marks(db, subject_id=subject.id) == []
    assert storage.get_subjects(db) == []


def test_update_mark_is_idempotent(db, cls):
    student = add_student(db, cls, 1, "A")
    subject = add_subject(db, cls)

    first = storage.update_mark(db, student.id, subject.id, "70")
    second = storage.update_mark(db, student.id, subject.id, "70")

    assert first.id == second.id
    rows = storage.get_marks(db, student_id=student.id, subject_id=subject.id)
    assert [(m.id, m.obtained) for m in rows] == [(first.id, "70")]


def test_update_mark_inserts_when_missing(db, cls):
    subject = add_subject(db, cls)
    student = add_student(db, cls, 1, "A")  # 과목 이후 등록 → 점수 행 없음

    mark = storage.update_mark(db, student.id, subject.id, "55")

    assert mark.obtained == "55"
    assert len(storage.get_marks(db, student_id=student.id)) == 1


def test_update_mark_unknown_ids(db, cls):
    student = add_student(db, cls, 1, "A")
    with pytest.raises(NotFoundError):
        storage.update_mark(db, student.id, 999, "10")
    with pytest.raises(NotFoundError):
        storage.update_mark(db, 999, 1, "10")


def test_update_marks_bulk_rolls_back_on_error(db, cls):
    student = add_student(db, cls, 1, "A")
    subject = add_subject(db, cls)

    with pytest.raises(NotFoundError):
        storage.update_marks(db, [
            MarkUpsert(student_id=student.id, subject_id=subject.id, obtained="77"),
            MarkUpsert(student_id=student.id, subject_id=999, obtained="1"),
        ])

    assert storage.get_marks(db, student_id=student.id)[0].obtained == "0"


def test_update_marks_bulk(db, cls):
    a = add_student(db, cls, 1, "A")
    b = add_student(db, cls, 2, "B")
    subject = add_subject(db, cls)

    marks = storage.update_marks(db, [
        MarkUpsert(student_id=a.id, subject_id=subject.id, obtained="70"),
        MarkUpsert(student_id=b.id, subject_id=subject.id, obtained=54),
    ])

    assert [m.obtained for m in marks] == ["70", "54"]
    assert len(storage.get_marks(db, subject_id=subject.id)) == 2


def test_missing_subject_gets_placeholder(db, cls):
    student = add_student(db, cls, 1, "A")
    db.add(MarkModel(student_id=student.id, subject_id=404, obtained="5"))
    db.commit()

    for view in (storage.get_student(db, student.id), storage.get_students(db)[0]):
        subject = view.marks[0].subject
        assert (subject.id, subject.name, subject.max_marks) == (0, "Unknown", 100)


def test_update_student_partial(db, cls):
    student = add_student(db, cls, 1, "A")
    updated = storage.update_student(db, student.id, StudentUpdate(name="Aakash"))
    assert (updated.roll_no, updated.name) == (1, "Aakash")
    with pytest.raises(NotFoundError):
        storage.update_student(db, 999, StudentUpdate(name="x"))
    with pytest.raises(NotFoundError):
        storage.update_student(db, student.id, StudentUpdate(class_id=999))


def test_update_subject(db, cls):
    subject = add_subject(db, cls)
    updated = storage.update_subject(db, subject.id, SubjectUpdate(max_marks=100))
    assert (updated.name, updated.max_marks) == ("Unit Test", 100)
    with pytest.raises(NotFoundError):
        storage.update_subject(db, 999, SubjectUpdate(name="x"))


def test_get_students_soft_fails(db, cls, monkeypatch):
    add_student(db, cls, 1, "A")

    def broken(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(storage, "_join_marks", broken)
    assert storage.get_students(db) == []
