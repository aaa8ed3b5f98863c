from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.models.user import User
from simplylearn.schemas.forum import ForumPostCreate, ForumPostRead
from simplylearn.services.forum import ForumService

router = APIRouter()


def get_forum_service(db: Session = Depends(get_db)) -> ForumService:
    return ForumService(db)


@router.get("/course/{course_id}", response_model=list[ForumPostRead])
def list_posts(
    course_id: int,
    order: Literal["desc", "asc"] = Query("desc"),
    forum: ForumService = Depends(get_forum_service),
    current_user: User = Depends(get_current_user),
):
    return forum.list_posts(course_id, current_user, newest_first=order == "desc")


@router.post("", response_model=ForumPostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: ForumPostCreate,
    forum: ForumService = Depends(get_forum_service),
    current_user: User = Depends(get_current_user),
):
    return forum.create_post(payload, current_user)
