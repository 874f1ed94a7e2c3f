"""
services/ranking.py

학생별 합계/백분율 계산과 리더보드 순위 계산.
DB나 요청 상태에 접근하지 않는 순수 함수만 둔다.
목록/상세/검색 결과 어디서 보여주든 같은 함수를 사용한다.
"""

import math
import re
from typing import Iterable, List, Optional

from schemas.students import MarkResult, MarkWithSubject, RankedStudent, StudentReport, StudentTotals, StudentWithMarks

# 과목 합격 기준 (과목 백분율)
PASS_PERCENTAGE = 33

# 앞부분의 숫자만 읽는다 ("70abc" → 70)
_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_obtained(value) -> float:
    """문자열 점수를 숫자로. 앞부분이 숫자가 아니면 0."""
    if value is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return 0.0
    number = float(match.group())
    if not math.isfinite(number):
        return 0.0
    return number


def summarize(student: StudentWithMarks) -> StudentTotals:
    total_obtained = sum(parse_obtained(m.obtained) for m in student.marks)
    total_max = sum(m.subject.max_marks for m in student.marks)
    percentage = 100 * total_obtained / total_max if total_max > 0 else 0.0
    return StudentTotals(
        total_obtained=total_obtained,
        total_max=total_max,
        percentage=percentage,
    )


def filter_students(students: Iterable[StudentWithMarks], search: Optional[str] = None) -> List[StudentWithMarks]:
    """이름(대소문자 무시) 또는 출석 번호에 검색어가 포함된 학생만 남긴다."""
    students = list(students)
    term = (search or "").strip().lower()
    if not term:
        return students
    return [s for s in students if term in s.name.lower() or term in str(s.roll_no)]


def rank_tier(rank: int) -> str:
    if rank == 1:
        return "gold"
    if rank == 2:
        return "silver"
    if rank == 3:
        return "bronze"
    if rank <= 10:
        return "top10"
    return "standard"


def performance_band(percentage: float) -> str:
    if percentage >= 60:
        return "good"
    if percentage >= 40:
        return "average"
    return "poor"


def rank_students(students: Iterable[StudentWithMarks], search: Optional[str] = None) -> List[RankedStudent]:
    """
    검색 필터를 먼저 적용한 뒤 백분율 내림차순으로 정렬해 순위를 매긴다.
    - sorted()는 안정 정렬이므로 동점자는 원래 순서를 유지
    - 순위는 저장하지 않고 조회할 때마다 다시 계산
    """
    visible = filter_students(students, search)
    scored = [(student, summarize(student)) for student in visible]
    scored = sorted(scored, key=lambda pair: pair[1].percentage, reverse=True)

    return [
        RankedStudent(
            rank=index,
            tier=rank_tier(index),
            total_obtained=totals.total_obtained,
            total_max=totals.total_max,
            percentage=totals.percentage,
            student=student,
        )
        for index, (student, totals) in enumerate(scored, start=1)
    ]


def mark_result(mark: MarkWithSubject) -> MarkResult:
    obtained = parse_obtained(mark.obtained)
    max_marks = mark.subject.max_marks
    percentage = 100 * obtained / max_marks if max_marks > 0 else 0.0
    return MarkResult(
        subject_id=mark.subject_id,
        subject_name=mark.subject.name,
        obtained=obtained,
        max_marks=max_marks,
        percentage=percentage,
        passed=percentage >= PASS_PERCENTAGE,
    )


def build_report(student: StudentWithMarks) -> StudentReport:
    totals = summarize(student)
    return StudentReport(
        total_obtained=totals.total_obtained,
        total_max=totals.total_max,
        percentage=totals.percentage,
        band=performance_band(totals.percentage),
        results=[mark_result(m) for m in student.marks],
        student=student,
    )
