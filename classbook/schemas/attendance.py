from pydantic import BaseModel
from typing import List, Literal, Optional

AttendanceStatus = Literal["PRESENT", "ABSENT", "LATE", "EXCUSED"]


class AttendanceCreate(BaseModel):
    session_id: str
    student_id: str
    status: AttendanceStatus
    reason: Optional[str] = None


class AttendanceOut(AttendanceCreate):
    id: str

    class Config:
        from_attributes = True


class StudentAttendanceOut(BaseModel):
    student_id: str
    attendance: int


class SyncError(BaseModel):
    student_id: str
    error: str


class SyncResult(BaseModel):
    total: int
    updated: int
    errors: List[SyncError]
