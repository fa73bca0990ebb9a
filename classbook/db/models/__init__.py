from classbook.db.base import Base
from classbook.db.models.user import User
from classbook.db.models.class_group import ClassGroup
from classbook.db.models.student import Student, enrollments
from classbook.db.models.session import ClassSession
from classbook.db.models.attendance import AttendanceRecord

__all__ = ["Base", "User", "ClassGroup", "Student", "enrollments", "ClassSession", "AttendanceRecord"]
