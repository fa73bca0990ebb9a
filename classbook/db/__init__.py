# classbook/db/__init__.py
# Этот файл гарантирует, что все модели импортированы при первом импорте classbook.db

from classbook.db.base import Base
from classbook.db.models import User, ClassGroup, Student, ClassSession, AttendanceRecord, enrollments

# Экспортируем Base и модели наружу
__all__ = ["Base", "User", "ClassGroup", "Student", "ClassSession", "AttendanceRecord", "enrollments"]
