# classbook/crud/class_group.py
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session

from classbook.core.schedule import RecurrenceDescriptor, normalize_schedule
from classbook.db.models.class_group import ClassGroup


def get_class(db: Session, class_id: str) -> Optional[ClassGroup]:
    return db.query(ClassGroup).filter(ClassGroup.id == class_id).first()


def get_schedule(class_group: ClassGroup) -> RecurrenceDescriptor:
    return normalize_schedule(class_group.default_schedule)


def set_schedule(db: Session, class_group: ClassGroup, raw: Any) -> RecurrenceDescriptor:
    descriptor = normalize_schedule(raw)
    # Пустое правило храним как NULL, чтобы планировщик класс не выбирал
    class_group.default_schedule = None if descriptor.is_empty() else descriptor.to_storage()
    db.commit()
    db.refresh(class_group)
    return descriptor


class SqlClassStore:
    def __init__(self, db: Session):
        self.db = db

    def list_scheduled_classes(self) -> List[Tuple[str, Any]]:
        rows = (
            self.db.query(ClassGroup.id, ClassGroup.default_schedule)
            .filter(ClassGroup.default_schedule.isnot(None), ClassGroup.default_schedule != "")
            .order_by(ClassGroup.id)
            .all()
        )
        return [(row.id, row.default_schedule) for row in rows]
