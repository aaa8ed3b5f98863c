from datetime import datetime

from pydantic import BaseModel

from simplylearn.models.enrollment import EnrollmentStatus
from simplylearn.schemas.course import CourseSummary


class EnrollmentCreate(BaseModel):
    course_id: int


class EnrollmentStatusUpdate(BaseModel):
    status: EnrollmentStatus


class EnrollmentOut(BaseModel):
    id: int
    student_id: int
    course_id: int
    status: EnrollmentStatus
    enrolled_at: datetime
    course: CourseSummary | None = None

    class Config:
        from_attributes = True


class EnrollmentCheck(BaseModel):
    enrolled: bool
