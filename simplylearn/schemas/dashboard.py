from pydantic import BaseModel

from simplylearn.schemas.course import CourseSummary


class DashboardCard(BaseModel):
    title: str
    value: int


class DashboardStats(BaseModel):
    title: str
    cards: list[DashboardCard]
    recent_courses: list[CourseSummary] | None = None
    enrolled_courses: list[CourseSummary] | None = None
