# classbook/db/migrate.py
import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from classbook.core.config import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(database_url: Optional[str] = None) -> Config:
    ini_path = PROJECT_ROOT / "alembic.ini"
    # Скрипты миграций не входят в wheel, запуск только из исходников
    if not ini_path.is_file():
        raise RuntimeError(
            f"alembic.ini not found at {ini_path}; run from a source checkout "
            "or set RUN_MIGRATIONS_ON_STARTUP=false"
        )
    config = Config(str(ini_path))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    # configparser воспринимает % как интерполяцию
    url = database_url or settings.DATABASE_URL
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def run_migrations(database_url: Optional[str] = None) -> None:
    """
    Доводит схему до head. Вызывается один раз при старте процесса;
    уже применённые ревизии отмечены в alembic_version и повторно не выполняются.
    """
    logger.info("[DB] Применяю миграции до head")
    command.upgrade(alembic_config(database_url), "head")
