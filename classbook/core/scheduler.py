# classbook/core/scheduler.py
"""
Генерация регулярных занятий по расписанию классов.

reconcile() чистая: сравнивает даты из правила с уже существующими
занятиями класса и возвращает только недостающие. Существующим считается
любое занятие на эту дату, в том числе отменённое, завершённое или
созданное вручную, поэтому повторный запуск ничего не дублирует.

run_maintenance() проходит по всем классам с расписанием. Ошибка в одном
классе откатывает только его транзакцию и попадает в summary.errors.
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, ContextManager, Iterable, List, Optional, Protocol, Set, Tuple

from classbook.core.config import settings
from classbook.core.schedule import (
    RecurrenceDescriptor,
    add_months,
    format_month,
    normalize_schedule,
    occurrences_in_month,
    reference_month,
)
from classbook.schemas.scheduler import ClassError, MaintenanceSummary, PlannedSession

logger = logging.getLogger(__name__)


class ClassStore(Protocol):
    def list_scheduled_classes(self) -> List[Tuple[str, Any]]:
        """Пары (class_id, сырое расписание) для классов с непустым default_schedule."""
        ...


class SessionStore(Protocol):
    def existing_dates(self, class_id: str, year: int, month: int) -> Set[date]:
        ...

    def insert(self, planned: PlannedSession) -> bool:
        """False, если на (class_id, date) занятие уже есть."""
        ...

    def transaction(self) -> ContextManager[None]:
        ...


def _new_session_id() -> str:
    return str(uuid.uuid4())


def reconcile(
    class_id: str,
    year: int,
    month: int,
    descriptor: RecurrenceDescriptor,
    existing_dates: Iterable[date],
) -> List[PlannedSession]:
    existing = set(existing_dates)
    start_time = descriptor.time or settings.DEFAULT_SESSION_START_TIME

    return [
        PlannedSession(
            id=_new_session_id(),
            class_id=class_id,
            date=day,
            start_time=start_time,
            duration_minutes=descriptor.duration_minutes,
            type="REGULAR",
            status="SCHEDULED",
            target_student_ids=None,
        )
        for day in occurrences_in_month(descriptor, year, month)
        if day not in existing
    ]


def target_months(reference: datetime | date, lookahead_months: int) -> List[Tuple[int, int]]:
    if lookahead_months < 0:
        raise ValueError("lookahead_months must be >= 0")
    year, month = reference_month(reference)
    return [add_months(year, month, offset) for offset in range(lookahead_months + 1)]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def reconcile_class(
    session_store: SessionStore,
    class_id: str,
    descriptor: RecurrenceDescriptor,
    months: List[Tuple[int, int]],
) -> List[PlannedSession]:
    """Досоздаёт занятия одного класса за все месяцы в одной транзакции."""
    created = []
    with session_store.transaction():
        for year, month in months:
            existing = session_store.existing_dates(class_id, year, month)
            for planned in reconcile(class_id, year, month, descriptor, existing):
                if session_store.insert(planned):
                    created.append(planned)
                else:
                    logger.debug(f"[Scheduler] {class_id} {planned.date}: занятие уже есть, пропускаем")
    return created


def run_maintenance(
    class_store: ClassStore,
    session_store: SessionStore,
    reference: Optional[datetime | date] = None,
    lookahead_months: Optional[int] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> MaintenanceSummary:
    if reference is None:
        reference = (clock or _utc_now)()
    if lookahead_months is None:
        lookahead_months = settings.SCHEDULER_LOOKAHEAD_MONTHS

    months = target_months(reference, lookahead_months)
    summary = MaintenanceSummary(months=[format_month(y, m) for y, m in months])

    # Если не удалось даже получить список классов, падаем целиком
    classes = class_store.list_scheduled_classes()
    logger.info(f"[Scheduler] Запуск для {summary.months}, классов с расписанием: {len(classes)}")

    for class_id, raw_schedule in classes:
        try:
            descriptor = normalize_schedule(raw_schedule)
        except Exception as e:
            logger.exception(f"[Scheduler] Не удалось разобрать расписание класса {class_id}: {e}")
            summary.classes_processed += 1
            summary.errors.append(ClassError(class_id=class_id, error=str(e)))
            continue

        if descriptor.is_empty():
            logger.debug(f"[Scheduler] {class_id}: нет дней в расписании, пропускаем")
            continue

        summary.classes_processed += 1
        try:
            created = reconcile_class(session_store, class_id, descriptor, months)
        except Exception as e:
            logger.exception(f"[Scheduler] Ошибка для класса {class_id}: {e}")
            summary.errors.append(ClassError(class_id=class_id, error=str(e)))
            continue

        summary.sessions.extend(created)
        summary.sessions_created += len(created)
        if created:
            logger.info(f"[Scheduler] {class_id}: создано занятий {len(created)}")

    logger.info(
        f"[Scheduler] Готово: классов {summary.classes_processed}, "
        f"создано {summary.sessions_created}, ошибок {len(summary.errors)}"
    )
    return summary
