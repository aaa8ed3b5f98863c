import logging

from sqlalchemy.orm import Session, joinedload

from simplylearn.core.clock import utcnow
from simplylearn.core.errors import InvalidInput, NotFound
from simplylearn.core.sanitize import strip_markup
from simplylearn.models.forum import ForumPost
from simplylearn.models.user import User
from simplylearn.schemas.forum import ForumPostCreate
from simplylearn.services.courses import ensure_course_exists, ensure_course_member

logger = logging.getLogger(__name__)


class ForumService:
    def __init__(self, db: Session):
        self.db = db

    def create_post(self, payload: ForumPostCreate, author: User) -> ForumPost:
        course = ensure_course_exists(self.db, payload.course_id)
        ensure_course_member(self.db, course, author)

        content = strip_markup(payload.content)
        if not content:
            raise InvalidInput("Content is required")

        if payload.parent_post_id is not None:
            parent = self.db.get(ForumPost, payload.parent_post_id)
            if not parent:
                raise NotFound("Parent post not found")
            if parent.course_id != course.id:
                raise InvalidInput("Parent post belongs to another course")

        post = ForumPost(
            course_id=course.id,
            author_id=author.id,
            content=content,
            parent_post_id=payload.parent_post_id,
            created_at=utcnow(),
        )
        self.db.add(post)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(post)
        logger.info("Forum post %s in course %s by %s", post.id, course.id, author.id)
        return post

    def list_posts(self, course_id: int, user: User, newest_first: bool = True) -> list[ForumPost]:
        course = ensure_course_exists(self.db, course_id)
        ensure_course_member(self.db, course, user)

        if newest_first:
            order = (ForumPost.created_at.desc(), ForumPost.id.desc())
        else:
            order = (ForumPost.created_at.asc(), ForumPost.id.asc())

        return (
            self.db.query(ForumPost)
            .options(joinedload(ForumPost.author))
            .filter(ForumPost.course_id == course_id)
            .order_by(*order)
            .all()
        )
