from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class AssignmentCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    instructions: str = ""
    deadline: datetime
    max_points: float = Field(default=100, ge=0)


class AssignmentRead(BaseModel):
    id: int
    course_id: int
    course_title: Optional[str] = None
    title: str
    instructions: str
    deadline: datetime
    max_points: float
    created_at: datetime

    class Config:
        from_attributes = True


class SubmissionSummary(BaseModel):
    submitted_at: datetime
    grade: Optional[float] = None
    is_late: bool = False


class StudentAssignmentRow(AssignmentRead):
    status: str  # "missing" | "submitted" | "graded"
    is_late: bool = False
    submission: Optional[SubmissionSummary] = None


class SubmissionStats(BaseModel):
    total: int
    pending: int


class TutorAssignmentRow(AssignmentRead):
    submission_stats: SubmissionStats
