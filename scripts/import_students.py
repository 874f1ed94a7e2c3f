import argparse
import csv
from sqlalchemy.orm import Session
from database.db import SessionLocal, init_db
from schemas.students import StudentCreate
from services import storage

# CSV 형식: roll_no,name  (헤더 포함)
CSV_PATH = "data/students.csv"  # ✅ 기본 파일 경로

def import_students(class_id: int, csv_path: str = CSV_PATH) -> int:
    init_db()
    db: Session = SessionLocal()
    count = 0
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                storage.create_student(db, StudentCreate(
                    roll_no=int(row["roll_no"]),        # 출석 번호
                    name=row["name"].strip(),           # 학생 이름
                    class_id=class_id,                  # 대상 학급
                ))
                count += 1
    finally:
        db.close()
    return count

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="학생 명단 CSV → DB")
    parser.add_argument("class_id", type=int)
    parser.add_argument("--csv", default=CSV_PATH)
    args = parser.parse_args()
    n = import_students(args.class_id, args.csv)
    print(f"✅ 학생 {n}명 CSV → DB 마이그레이션 완료")
