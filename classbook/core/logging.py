# classbook/core/logging.py
import logging

from classbook.core.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Настраивает корневой логгер один раз: консольный хендлер и общий формат."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if any(getattr(h, "_classbook", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._classbook = True
    root.addHandler(handler)
