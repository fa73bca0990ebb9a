# classbook/crud/attendance.py
import uuid
from typing import Iterable, List

from sqlalchemy.orm import Session

from classbook.db.models.attendance import AttendanceRecord


def get_record(db: Session, session_id: str, student_id: str):
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.session_id == session_id,
        AttendanceRecord.student_id == student_id
    ).first()


def upsert_record(db: Session, record_in) -> AttendanceRecord:
    # Одна запись на пару (занятие, ученик): находим или создаём
    existing = get_record(db, record_in.session_id, record_in.student_id)

    if existing:
        existing.status = record_in.status
        existing.reason = record_in.reason
    else:
        existing = AttendanceRecord(
            id=uuid.uuid4().hex,
            session_id=record_in.session_id,
            student_id=record_in.student_id,
            status=record_in.status,
            reason=record_in.reason
        )
        db.add(existing)

    db.commit()
    db.refresh(existing)
    return existing


def list_for_session(db: Session, session_id: str) -> List[AttendanceRecord]:
    return db.query(AttendanceRecord).filter(AttendanceRecord.session_id == session_id).all()


def list_for_student(db: Session, student_id: str, session_ids: Iterable[str]) -> List[AttendanceRecord]:
    session_ids = list(session_ids)
    if not session_ids:
        return []
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.student_id == student_id,
        AttendanceRecord.session_id.in_(session_ids)
    ).all()
