from pydantic import BaseModel
from datetime import date
from typing import List, Literal, Optional

SessionType = Literal["REGULAR", "MAKEUP", "TRIAL"]
SessionStatus = Literal["SCHEDULED", "IN_PROGRESS", "COMPLETED", "CANCELLED"]


class SessionCreate(BaseModel):
    id: Optional[str] = None
    class_id: str
    date: date
    start_time: str
    duration_minutes: int = 60
    type: SessionType = "REGULAR"
    status: SessionStatus = "SCHEDULED"
    target_student_ids: Optional[List[str]] = None


class SessionStatusUpdate(BaseModel):
    status: SessionStatus


class SessionOut(SessionCreate):
    id: str

    class Config:
        from_attributes = True
