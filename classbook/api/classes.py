# classbook/api/classes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, get_current_user, require_admin
from classbook.crud import class_group as crud_class
from classbook.db.models.user import User
from classbook.schemas.schedule import ScheduleOut, ScheduleUpdate

router = APIRouter()


@router.get("/{class_id}/schedule", response_model=ScheduleOut)
def get_class_schedule(
    class_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    class_group = crud_class.get_class(db, class_id)
    if not class_group:
        raise HTTPException(status_code=404, detail="Класс не найден")
    return {"class_id": class_id, "schedule": crud_class.get_schedule(class_group)}


@router.put("/{class_id}/schedule", response_model=ScheduleOut)
def update_class_schedule(
    class_id: str,
    schedule_in: ScheduleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    class_group = crud_class.get_class(db, class_id)
    if not class_group:
        raise HTTPException(status_code=404, detail="Класс не найден")

    descriptor = crud_class.set_schedule(db, class_group, schedule_in.schedule)
    return {"class_id": class_id, "schedule": descriptor}
