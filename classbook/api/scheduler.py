# classbook/api/scheduler.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from classbook.api.deps import get_db, require_admin
from classbook.core.schedule import format_month, parse_month, reference_month
from classbook.core.scheduler import run_maintenance
from classbook.crud.class_group import SqlClassStore
from classbook.crud.session import SqlSessionStore, delete_sessions_in_month
from classbook.db.models.user import User
from classbook.schemas.scheduler import MaintenanceSummary, MonthCleanupResult, SchedulerRunRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _month_or_400(month: Optional[str]):
    if not month:
        return None
    try:
        return parse_month(month)
    except ValueError:
        raise HTTPException(status_code=400, detail="Неверный формат месяца, нужен YYYY-MM")


@router.post("/run", response_model=MaintenanceSummary)
def run_scheduler(
    request: Optional[SchedulerRunRequest] = Body(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    request = request or SchedulerRunRequest()
    parsed = _month_or_400(request.month)
    reference = date(parsed[0], parsed[1], 1) if parsed else None

    logger.info(f"[Scheduler] Ручной запуск администратором {current_user.email}, month={request.month}")
    try:
        return run_maintenance(
            SqlClassStore(db),
            SqlSessionStore(db),
            reference=reference,
            lookahead_months=request.lookahead_months,
        )
    except Exception as e:
        logger.exception(f"[Scheduler] Планировщик упал целиком: {e}")
        raise HTTPException(status_code=500, detail="Ошибка планировщика занятий")


@router.delete("/sessions", response_model=MonthCleanupResult)
def delete_month_sessions(
    month: Optional[str] = Query(None, description="YYYY-MM, по умолчанию текущий месяц"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    year, month_number = _month_or_400(month) or reference_month(date.today())

    deleted_ids = delete_sessions_in_month(db, year, month_number)
    logger.info(f"[Scheduler] Удалено занятий за {format_month(year, month_number)}: {len(deleted_ids)}")
    return {
        "month": format_month(year, month_number),
        "deleted": len(deleted_ids),
        "deleted_ids": deleted_ids,
    }
