# classbook/db/models/class_group.py
from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from classbook.db.base import Base


class ClassGroup(Base):
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=True)
    location_id = Column(String, nullable=True)
    grade = Column(String, nullable=True)  # например, "Standard 4"

    # JSON-текст: {"days": [...], "time": "HH:MM", "durationMinutes": 60}
    # Читать только через normalize_schedule()
    default_schedule = Column(Text, nullable=True)

    sessions = relationship("ClassSession", back_populates="class_group")
    students = relationship("Student", secondary="enrollments", back_populates="classes")
