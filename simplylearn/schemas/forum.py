from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from simplylearn.models.user import Role


class ForumPostCreate(BaseModel):
    course_id: int
    content: str = Field(min_length=1, max_length=10000)
    parent_post_id: Optional[int] = None


class ForumPostRead(BaseModel):
    id: int
    course_id: int
    author_id: int
    author_name: Optional[str] = None
    author_role: Optional[Role] = None
    content: str
    parent_post_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
