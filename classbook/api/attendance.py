from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from classbook.api.deps import get_db, get_current_user, require_staff
from classbook.crud import attendance as crud_attendance
from classbook.crud.session import get_session
from classbook.db.models.student import Student
from classbook.db.models.user import User
from classbook.schemas.attendance import AttendanceOut, AttendanceCreate

router = APIRouter()


# Все отметки посещаемости по занятию
@router.get("/session/{session_id}", response_model=List[AttendanceOut])
def get_attendance_for_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not get_session(db, session_id):
        raise HTTPException(status_code=404, detail="Занятие не найдено")
    return crud_attendance.list_for_session(db, session_id)


# Отметить или обновить статус посещения
@router.post("/record", response_model=AttendanceOut)
def update_attendance_record(
    record: AttendanceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    session = get_session(db, record.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Занятие не найдено")

    # Проверяем, что ученик записан в класс этого занятия
    student = db.query(Student).filter(
        Student.id == record.student_id,
        Student.classes.any(id=session.class_id)
    ).first()
    if not student:
        raise HTTPException(status_code=400, detail="Ученик не найден в классе")

    return crud_attendance.upsert_record(db, record)
