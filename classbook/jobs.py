# classbook/jobs.py
"""
Точка входа для внешнего таймера (cron, платформенный scheduler):

    classbook-maintenance
    python -m classbook.jobs

Ошибки логируются и наружу не пробрасываются, повторов нет.
"""
import logging
from datetime import datetime
from typing import Optional

from classbook.core.logging import setup_logging
from classbook.core.scheduler import run_maintenance
from classbook.crud.class_group import SqlClassStore
from classbook.crud.session import SqlSessionStore
from classbook.db.session import SessionLocal
from classbook.schemas.scheduler import MaintenanceSummary

logger = logging.getLogger(__name__)


def run_scheduled_maintenance(
    reference: Optional[datetime] = None,
    session_factory=SessionLocal,
) -> Optional[MaintenanceSummary]:
    db = session_factory()
    try:
        summary = run_maintenance(SqlClassStore(db), SqlSessionStore(db), reference=reference)
    except Exception as e:
        logger.exception(f"[Scheduler] Плановый запуск завершился ошибкой: {e}")
        return None
    finally:
        db.close()

    for error in summary.errors:
        logger.error(f"[Scheduler] Класс {error.class_id}: {error.error}")
    logger.info(
        f"[Scheduler] Плановый запуск {summary.months}: "
        f"создано {summary.sessions_created}, ошибок {len(summary.errors)}"
    )
    return summary


def main() -> None:
    setup_logging()
    run_scheduled_maintenance()


if __name__ == "__main__":
    main()
