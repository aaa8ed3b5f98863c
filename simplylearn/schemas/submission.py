from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SubmissionRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    file_url: Optional[str] = None
    text_entry: Optional[str] = None
    submitted_at: datetime
    grade: Optional[float] = None
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None

    # computed against the assignment deadline
    is_late: bool = False
    late_by_minutes: Optional[int] = None

    class Config:
        from_attributes = True


class StudentRef(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class SubmissionWithStudent(SubmissionRead):
    student: StudentRef


class SubmissionGradeUpdate(BaseModel):
    grade: float = Field(allow_inf_nan=False)
    feedback: Optional[str] = Field(default=None, max_length=10000)
