# classbook/core/attendance_sync.py
"""
Пересчёт кэшированного процента посещаемости ученика (students.attendance).

Поле не поддерживается в актуальном состоянии автоматически: значение
обновляется только при явном вызове пересчёта.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from classbook.crud.attendance import list_for_student
from classbook.db.models.session import ClassSession
from classbook.db.models.student import Student

logger = logging.getLogger(__name__)


class StudentNotFound(LookupError):
    pass


def applicable_sessions(db: Session, student: Student) -> List[ClassSession]:
    class_ids = [c.id for c in student.classes]
    if not class_ids:
        return []

    completed = db.query(ClassSession).filter(
        ClassSession.class_id.in_(class_ids),
        ClassSession.status == "COMPLETED"
    ).all()
    # Пустой список целей = занятие для всего класса
    return [
        s for s in completed
        if not s.target_student_ids or student.id in s.target_student_ids
    ]


def attendance_percentage(present: int, total: int) -> int:
    if total <= 0:
        return 0
    # Округление половины вверх, как в отчётах на фронтенде
    return (200 * present + total) // (2 * total)


def calculate_student_attendance(db: Session, student: Student) -> int:
    sessions = applicable_sessions(db, student)
    if not sessions:
        return 0

    records = list_for_student(db, student.id, [s.id for s in sessions])
    present = sum(1 for r in records if r.status == "PRESENT")
    return attendance_percentage(present, len(sessions))


def recompute_student_attendance(db: Session, student_id: str) -> int:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise StudentNotFound(f"Student {student_id} not found")

    try:
        student.attendance = calculate_student_attendance(db, student)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.debug(f"[Sync] {student_id}: посещаемость {student.attendance}%")
    return student.attendance


def _recompute_many(db: Session, student_ids: List[str]) -> dict:
    results = {"total": len(student_ids), "updated": 0, "errors": []}

    for student_id in student_ids:
        try:
            recompute_student_attendance(db, student_id)
            results["updated"] += 1
        except Exception as e:
            logger.exception(f"[Sync] Ошибка пересчёта для ученика {student_id}: {e}")
            results["errors"].append({"student_id": student_id, "error": str(e)})

    logger.info(
        f"[Sync] Пересчитано {results['updated']} из {results['total']}, ошибок {len(results['errors'])}"
    )
    return results


def recompute_all_students(db: Session) -> dict:
    student_ids = [row.id for row in db.query(Student.id).order_by(Student.id).all()]
    return _recompute_many(db, student_ids)


def recompute_class_students(db: Session, class_id: str) -> dict:
    student_ids = [
        row.id
        for row in db.query(Student.id)
        .filter(Student.classes.any(id=class_id))
        .order_by(Student.id)
        .all()
    ]
    return _recompute_many(db, student_ids)
