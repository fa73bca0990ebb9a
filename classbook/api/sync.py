# classbook/api/sync.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, require_admin, require_staff
from classbook.core import attendance_sync
from classbook.db.models.user import User
from classbook.schemas.attendance import StudentAttendanceOut, SyncResult

router = APIRouter()


@router.post("/attendance", response_model=SyncResult)
def sync_all_attendance(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return attendance_sync.recompute_all_students(db)


@router.post("/attendance/student/{student_id}", response_model=StudentAttendanceOut)
def sync_student_attendance(
    student_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    try:
        percentage = attendance_sync.recompute_student_attendance(db, student_id)
    except attendance_sync.StudentNotFound:
        raise HTTPException(status_code=404, detail="Ученик не найден")
    return {"student_id": student_id, "attendance": percentage}


@router.post("/attendance/class/{class_id}", response_model=SyncResult)
def sync_class_attendance(
    class_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    return attendance_sync.recompute_class_students(db, class_id)
