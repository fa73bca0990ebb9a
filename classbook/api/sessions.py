# classbook/api/sessions.py
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, get_current_user, require_staff
from classbook.core.schedule import parse_month
from classbook.crud import class_group as crud_class
from classbook.crud import session as crud_session
from classbook.db.models.user import User
from classbook.schemas.session import SessionCreate, SessionOut, SessionStatusUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[SessionOut])
def read_sessions(
    class_id: Optional[str] = Query(None),
    month: Optional[str] = Query(None, description="YYYY-MM"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    year = month_number = None
    if month:
        try:
            year, month_number = parse_month(month)
        except ValueError:
            raise HTTPException(status_code=400, detail="Неверный формат месяца, нужен YYYY-MM")
    return crud_session.list_sessions(db, class_id=class_id, year=year, month=month_number)


@router.post("/", response_model=SessionOut, status_code=201)
def create_session(
    session_in: SessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    if not crud_class.get_class(db, session_in.class_id):
        raise HTTPException(status_code=404, detail="Класс не найден")

    if crud_session.get_session_by_class_date(db, session_in.class_id, session_in.date):
        raise HTTPException(status_code=409, detail="У класса уже есть занятие в этот день")

    if not session_in.id:
        session_in = session_in.model_copy(update={"id": str(uuid.uuid4())})

    try:
        return crud_session.create_session(db, session_in)
    except IntegrityError as e:
        # Гонка с планировщиком или повтор id
        db.rollback()
        logger.warning(f"[Sessions] Конфликт при создании занятия: {e}")
        raise HTTPException(status_code=409, detail="Занятие уже существует")


@router.patch("/{session_id}/status", response_model=SessionOut)
def update_session_status(
    session_id: str,
    status_in: SessionStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    db_session = crud_session.get_session(db, session_id)
    if not db_session:
        raise HTTPException(status_code=404, detail="Занятие не найдено")
    return crud_session.update_status(db, db_session, status_in.status)
