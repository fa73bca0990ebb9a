from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional


class PlannedSession(BaseModel):
    id: str
    class_id: str
    date: date
    start_time: str
    duration_minutes: int = 60
    type: str = "REGULAR"
    status: str = "SCHEDULED"
    target_student_ids: Optional[List[str]] = None


class ClassError(BaseModel):
    class_id: str
    error: str


class MaintenanceSummary(BaseModel):
    months: List[str]
    classes_processed: int = 0
    sessions_created: int = 0
    sessions: List[PlannedSession] = Field(default_factory=list)
    errors: List[ClassError] = Field(default_factory=list)


class SchedulerRunRequest(BaseModel):
    month: Optional[str] = None  # "YYYY-MM", по умолчанию текущий месяц
    lookahead_months: Optional[int] = Field(default=None, ge=0)


class MonthCleanupResult(BaseModel):
    month: str
    deleted: int
    deleted_ids: List[str]
