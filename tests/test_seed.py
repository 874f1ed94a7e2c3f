from models.admins import Admin
from models.marks import Mark
from models.sessions import AcademicSession
from models.students import Student
from models.subjects import Subject
from services import ranking, storage
from services.seed import SEED_STUDENTS, seed_database


def test_seed_populates_empty_database(db):
    seed_database(db)

    assert db.query(Admin).count() == 1
    active = storage.get_active_session(db)
    assert active.name == "2025-26"
    classes = storage.get_classes(db, active.id)
    assert [c.name for c in classes] == ["Standard 10"]

    students = storage.get_students(db, classes[0].id)
    assert len(students) == len(SEED_STUDENTS)
    assert db.query(Subject).count() == 1
    assert db.query(Mark).count() == len(SEED_STUDENTS)

    board = ranking.rank_students(students)
    assert board[0].student.name == "Rahul Kumar"
    assert board[0].percentage == 87.5


def test_seed_is_idempotent(db):
    seed_database(db)
    seed_database(db)

    assert db.query(Admin).count() == 1
    assert db.query(AcademicSession).count() == 1
    assert db.query(Student).count() == len(SEED_STUDENTS)
    assert db.query(Mark).count() == len(SEED_STUDENTS)


def test_seed_keeps_existing_sessions(db):
    from schemas.sessions import SessionCreate

    storage.create_session(db, SessionCreate(name="2030-31", is_active=False))
    seed_database(db)

    assert [s.name for s in storage.get_sessions(db)] == ["2030-31"]
    # 학급이 없으므로 학생 초기 데이터는 건너뜀
    assert db.query(Student).count() == 0
