from datetime import date

import pytest

from classbook.core.attendance_sync import (
    StudentNotFound,
    attendance_percentage,
    recompute_all_students,
    recompute_class_students,
    recompute_student_attendance,
)
from classbook.db import AttendanceRecord, ClassSession, Student


def add_session(db, session_id, class_id, day, status="COMPLETED", targets=None):
    db.add(ClassSession(id=session_id, class_id=class_id, date=date(2024, 3, day), start_time="09:00",
                        type="REGULAR", status=status, target_student_ids=targets))
    db.commit()


def mark(db, session_id, student_id, status):
    db.add(AttendanceRecord(id=f"{session_id}-{student_id}", session_id=session_id,
                            student_id=student_id, status=status))
    db.commit()


def test_no_sessions_gives_zero(db, make_class, make_student):
    c1 = make_class("c1")
    make_student("s1", [c1])
    assert recompute_student_attendance(db, "s1") == 0


def test_student_without_classes_gives_zero(db, make_student):
    make_student("s1")
    assert recompute_student_attendance(db, "s1") == 0


def test_only_completed_and_applicable_sessions_count(db, make_class, make_student):
    c1 = make_class("c1")
    make_student("s1", [c1])
    make_student("s2", [c1])

    add_session(db, "x1", "c1", 4)
    add_session(db, "x2", "c1", 11)
    add_session(db, "x3", "c1", 18, targets=["s2"])   # не для s1
    add_session(db, "x4", "c1", 25, status="CANCELLED")
    add_session(db, "x5", "c1", 26, targets=["s1"])

    mark(db, "x1", "s1", "PRESENT")
    mark(db, "x2", "s1", "LATE")
    mark(db, "x5", "s1", "PRESENT")

    # 2 PRESENT из 3 применимых занятий
    assert recompute_student_attendance(db, "s1") == 67
    assert db.get(Student, "s1").attendance == 67


def test_sessions_of_other_classes_ignored(db, make_class, make_student):
    c1 = make_class("c1")
    make_class("c2")
    make_student("s1", [c1])
    add_session(db, "x1", "c1", 4)
    add_session(db, "y1", "c2", 4)
    mark(db, "x1", "s1", "PRESENT")
    assert recompute_student_attendance(db, "s1") == 100


def test_unknown_student_raises(db):
    with pytest.raises(StudentNotFound):
        recompute_student_attendance(db, "nobody")


@pytest.mark.parametrize("present, total, expected", [
    (0, 0, 0), (1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 3, 100),
])
def test_percentage_rounds_half_up(present, total, expected):
    assert attendance_percentage(present, total) == expected


def test_batch_recompute(db, make_class, make_student):
    c1 = make_class("c1")
    c2 = make_class("c2")
    make_student("s1", [c1])
    make_student("s2", [c2])
    add_session(db, "x1", "c1", 4)
    mark(db, "x1", "s1", "PRESENT")

    assert recompute_all_students(db) == {"total": 2, "updated": 2, "errors": []}
    assert db.get(Student, "s1").attendance == 100

    result = recompute_class_students(db, "c2")
    assert result["total"] == 1
    assert result["updated"] == 1
