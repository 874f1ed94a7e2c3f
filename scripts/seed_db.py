from sqlalchemy.orm import Session
from database.db import SessionLocal, init_db
from services.seed import seed_database

def run_seed():
    init_db()
    db: Session = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()
    print("✅ 초기 데이터 확인/생성 완료")

if __name__ == "__main__":
    run_seed()
