# classbook/crud/session.py
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional, Set

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from classbook.core.schedule import month_bounds
from classbook.db.models.attendance import AttendanceRecord
from classbook.db.models.session import ClassSession
from classbook.schemas.scheduler import PlannedSession

# Для каждой поддерживаемой БД свой INSERT ... ON CONFLICT DO NOTHING
_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def get_session(db: Session, session_id: str) -> Optional[ClassSession]:
    return db.query(ClassSession).filter(ClassSession.id == session_id).first()


def get_session_by_class_date(db: Session, class_id: str, day: date) -> Optional[ClassSession]:
    return db.query(ClassSession).filter(
        ClassSession.class_id == class_id,
        ClassSession.date == day
    ).first()


def list_sessions(
    db: Session,
    class_id: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[ClassSession]:
    query = db.query(ClassSession)
    if class_id:
        query = query.filter(ClassSession.class_id == class_id)
    if year and month:
        first, last = month_bounds(year, month)
        query = query.filter(ClassSession.date >= first, ClassSession.date <= last)
    return query.order_by(ClassSession.date, ClassSession.start_time).all()


def create_session(db: Session, session_data) -> ClassSession:
    db_session = ClassSession(**session_data.model_dump())
    db.add(db_session)
    db.commit()
    db.refresh(db_session)
    return db_session


def update_status(db: Session, db_session: ClassSession, status: str) -> ClassSession:
    db_session.status = status
    db.commit()
    db.refresh(db_session)
    return db_session


def delete_sessions_in_month(db: Session, year: int, month: int) -> List[str]:
    first, last = month_bounds(year, month)
    in_month = (ClassSession.date >= first, ClassSession.date <= last)

    ids = [row.id for row in db.query(ClassSession.id).filter(*in_month).all()]
    if ids:
        # В SQLite внешние ключи по умолчанию выключены, ON DELETE CASCADE не сработает
        db.query(AttendanceRecord).filter(AttendanceRecord.session_id.in_(ids)).delete(synchronize_session=False)
        db.query(ClassSession).filter(*in_month).delete(synchronize_session=False)
    db.commit()
    return ids


class SqlSessionStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def existing_dates(self, class_id: str, year: int, month: int) -> Set[date]:
        first, last = month_bounds(year, month)
        rows = self.db.query(ClassSession.date).filter(
            ClassSession.class_id == class_id,
            ClassSession.date >= first,
            ClassSession.date <= last
        ).all()
        return {row.date for row in rows}

    def insert(self, planned: PlannedSession) -> bool:
        dialect = self.db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect: {dialect}")

        stmt = (
            insert(ClassSession)
            .values(**planned.model_dump())
            .on_conflict_do_nothing(index_elements=["class_id", "date"])
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1
