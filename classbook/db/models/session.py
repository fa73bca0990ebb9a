# classbook/db/models/session.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from classbook.db.base import Base

SESSION_TYPES = ("REGULAR", "MAKEUP", "TRIAL")
SESSION_STATUSES = ("SCHEDULED", "IN_PROGRESS", "COMPLETED", "CANCELLED")


class ClassSession(Base):
    __tablename__ = "sessions"
    # Одно занятие на класс в день: на этом держится идемпотентность планировщика
    __table_args__ = (
        UniqueConstraint("class_id", "date", name="uq_sessions_class_date"),
    )

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String, nullable=False)  # "HH:MM"
    duration_minutes = Column(Integer, nullable=False, default=60)
    type = Column(Enum(*SESSION_TYPES, name="session_type"), nullable=False, default="REGULAR")
    status = Column(Enum(*SESSION_STATUSES, name="session_status"), nullable=False, default="SCHEDULED")

    # None или []: занятие для всех учеников класса
    target_student_ids = Column(JSON, nullable=True)

    class_group = relationship("ClassGroup", back_populates="sessions")
    attendance_records = relationship("AttendanceRecord", back_populates="session")
