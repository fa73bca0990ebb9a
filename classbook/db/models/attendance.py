# classbook/db/models/attendance.py
from sqlalchemy import Column, String, Text, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from classbook.db.base import Base

ATTENDANCE_STATUSES = ("PRESENT", "ABSENT", "LATE", "EXCUSED")


class AttendanceRecord(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),
    )

    id = Column(String, primary_key=True, index=True)
    session_id = Column(String, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)

    # Статус посещения:
    # "PRESENT": присутствовал
    # "ABSENT": отсутствовал
    # "LATE": опоздал
    # "EXCUSED": отсутствовал по уважительной причине
    status = Column(Enum(*ATTENDANCE_STATUSES, name="attendance_status"), nullable=False)
    reason = Column(Text, nullable=True)

    session = relationship("ClassSession", back_populates="attendance_records")
    student = relationship("Student", back_populates="attendance_records")
