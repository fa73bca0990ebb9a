# classbook/db/models/student.py
from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship
from classbook.db.base import Base

enrollments = Table(
    "enrollments",
    Base.metadata,
    Column("student_id", String, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
    Column("class_id", String, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
)


class Student(Base):
    __tablename__ = "students"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    parent_id = Column(String, ForeignKey("users.id"), nullable=True)

    # Кэш процента посещаемости, пересчитывается только по запросу (см. attendance_sync)
    attendance = Column(Integer, nullable=False, default=0)

    classes = relationship("ClassGroup", secondary=enrollments, back_populates="students")
    attendance_records = relationship("AttendanceRecord", back_populates="student")
