from pydantic import BaseModel
from typing import Any, Optional

from classbook.core.schedule import RecurrenceDescriptor


class ScheduleOut(BaseModel):
    class_id: str
    schedule: RecurrenceDescriptor


class ScheduleUpdate(BaseModel):
    # Принимаем что угодно: нормализатор сам отбросит мусор
    schedule: Optional[Any] = None
