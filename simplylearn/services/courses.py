import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from simplylearn.core.errors import Forbidden, InvalidInput, NotFound
from simplylearn.core.permissions import can_manage_course
from simplylearn.models.course import Course, CourseMaterial
from simplylearn.models.enrollment import Enrollment, EnrollmentStatus
from simplylearn.models.user import Role, User
from simplylearn.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)


def ensure_course_exists(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")
    return course


def is_enrolled(db: Session, course_id: int, student_id: int) -> bool:
    return (
        db.query(Enrollment)
        .filter(Enrollment.course_id == course_id, Enrollment.student_id == student_id)
        .first()
        is not None
    )


def ensure_course_member(db: Session, course: Course, user: User) -> None:
    """Owner, admin or enrolled student; anyone else gets Forbidden."""
    if can_manage_course(user, course.tutor_id):
        return
    if user.role == Role.STUDENT and is_enrolled(db, course.id, user.id):
        return
    raise Forbidden("Not enrolled in this course")


def ensure_course_manager(course: Course, user: User, action: str) -> None:
    if not can_manage_course(user, course.tutor_id):
        raise Forbidden(f"Not authorized to {action} this course")


class CourseService:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def list_courses(self) -> list[Course]:
        return self.db.query(Course).order_by(Course.id.asc()).all()

    def get(self, course_id: int) -> Course:
        return ensure_course_exists(self.db, course_id)

    def create(self, payload: CourseCreate, tutor: User) -> Course:
        title = payload.title.strip()
        description = payload.description.strip()
        if not title or not description:
            raise InvalidInput("Title and description are required")

        course = Course(title=title, description=description, tutor_id=tutor.id)
        self.db.add(course)
        self._commit()
        self.db.refresh(course)
        logger.info("Course %s created by %s", course.id, tutor.email)
        return course

    def update(self, course_id: int, payload: CourseUpdate, user: User) -> Course:
        course = ensure_course_exists(self.db, course_id)
        ensure_course_manager(course, user, "update")

        if payload.title and payload.title.strip():
            course.title = payload.title.strip()
        if payload.description and payload.description.strip():
            course.description = payload.description.strip()

        if payload.materials is not None:
            entries = payload.materials if isinstance(payload.materials, list) else [payload.materials]
            # append, never replace
            for m in entries:
                course.materials.append(
                    CourseMaterial(title=m.title.strip(), type=m.type, url=m.url.strip())
                )

        self._commit()
        self.db.refresh(course)
        return course


class EnrollmentService:
    def __init__(self, db: Session):
        self.db = db

    def enroll(self, course_id: int, student: User) -> Enrollment:
        ensure_course_exists(self.db, course_id)
        if is_enrolled(self.db, course_id, student.id):
            raise InvalidInput("Already enrolled")

        enrollment = Enrollment(student_id=student.id, course_id=course_id)
        self.db.add(enrollment)
        try:
            self.db.commit()
        except IntegrityError:
            # concurrent enroll of the same pair
            self.db.rollback()
            raise InvalidInput("Already enrolled")

        self.db.refresh(enrollment)
        logger.info("Student %s enrolled in course %s", student.id, course_id)
        return enrollment

    def my_enrollments(self, student: User) -> list[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.student_id == student.id)
            .order_by(Enrollment.id.asc())
            .all()
        )

    def check(self, course_id: int, user: User) -> bool:
        return is_enrolled(self.db, course_id, user.id)

    def set_status(self, enrollment_id: int, status: EnrollmentStatus, user: User) -> Enrollment:
        enrollment = self.db.get(Enrollment, enrollment_id)
        if not enrollment:
            raise NotFound("Enrollment not found")

        own = enrollment.student_id == user.id
        if not own and not can_manage_course(user, enrollment.course.tutor_id):
            raise Forbidden("Not authorized to change this enrollment")

        enrollment.status = status
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(enrollment)
        return enrollment
