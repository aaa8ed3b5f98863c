from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from simplylearn.models.course import MaterialType


class MaterialIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    type: MaterialType
    url: str = Field(min_length=1, max_length=1024)


class MaterialRead(BaseModel):
    id: int
    title: str
    type: MaterialType
    url: str
    uploaded_at: datetime

    class Config:
        from_attributes = True


class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    # a single entry or a list; both are appended
    materials: Optional[list[MaterialIn] | MaterialIn] = None


class CourseRead(BaseModel):
    id: int
    title: str
    description: str
    tutor_id: int
    tutor_name: Optional[str] = None
    materials: list[MaterialRead] = []
    created_at: datetime

    class Config:
        from_attributes = True


class CourseSummary(BaseModel):
    id: int
    title: str

    class Config:
        from_attributes = True
