import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from simplylearn.core.clock import as_utc
from simplylearn.core.errors import InvalidInput
from simplylearn.models.assignment import Assignment
from simplylearn.models.course import Course
from simplylearn.models.enrollment import Enrollment
from simplylearn.models.submission import Submission
from simplylearn.models.user import Role, User
from simplylearn.schemas.assignment import AssignmentCreate
from simplylearn.services.courses import (
    ensure_course_exists,
    ensure_course_manager,
    ensure_course_member,
)
from simplylearn.services.submissions import ensure_assignment_exists, late_status

logger = logging.getLogger(__name__)


class AssignmentService:
    def __init__(self, db: Session):
        self.db = db

    def list_for_course(self, course_id: int, user: User) -> list[Assignment]:
        course = ensure_course_exists(self.db, course_id)
        ensure_course_member(self.db, course, user)
        return (
            self.db.query(Assignment)
            .filter(Assignment.course_id == course_id)
            .order_by(Assignment.deadline.asc(), Assignment.id.asc())
            .all()
        )

    def get(self, assignment_id: int, user: User) -> Assignment:
        assignment = ensure_assignment_exists(self.db, assignment_id)
        ensure_course_member(self.db, assignment.course, user)
        return assignment

    def create(self, payload: AssignmentCreate, user: User) -> Assignment:
        course = ensure_course_exists(self.db, payload.course_id)
        ensure_course_manager(course, user, "add assignments to")

        title = payload.title.strip()
        if not title:
            raise InvalidInput("Title is required")

        a = Assignment(
            course_id=course.id,
            title=title,
            instructions=payload.instructions.strip(),
            deadline=as_utc(payload.deadline),
            max_points=payload.max_points,
        )
        self.db.add(a)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(a)
        logger.info("Assignment %s created in course %s", a.id, course.id)
        return a

    def student_assignments(self, student: User) -> list[dict]:
        """Assignments of every enrolled course with this student's status."""
        rows = (
            self.db.query(Assignment, Submission)
            .join(Enrollment, Enrollment.course_id == Assignment.course_id)
            .outerjoin(
                Submission,
                (Submission.assignment_id == Assignment.id)
                & (Submission.student_id == student.id),
            )
            .filter(Enrollment.student_id == student.id)
            .order_by(Assignment.deadline.asc(), Assignment.id.asc())
            .all()
        )

        result: list[dict] = []
        for a, sub in rows:
            summary = None
            is_late = False
            if sub is None:
                status_val = "missing"
            else:
                status_val = "submitted" if sub.grade is None else "graded"
                is_late, _ = late_status(a.deadline, sub.submitted_at)
                summary = {
                    "submitted_at": sub.submitted_at,
                    "grade": sub.grade,
                    "is_late": is_late,
                }

            result.append(
                {
                    **_assignment_fields(a),
                    "status": status_val,
                    "is_late": is_late,
                    "submission": summary,
                }
            )
        return result

    def tutor_assignments(self, user: User) -> list[dict]:
        """Assignments of the tutor's courses (all courses for admins) with counts."""
        query = self.db.query(Assignment).join(Course, Course.id == Assignment.course_id)
        if user.role != Role.ADMIN:
            query = query.filter(Course.tutor_id == user.id)
        assignments = query.order_by(Assignment.deadline.asc(), Assignment.id.asc()).all()

        counts = {}
        if assignments:
            counts = {
                r.assignment_id: (int(r.total or 0), int(r.graded or 0))
                for r in self.db.query(
                    Submission.assignment_id,
                    func.count(Submission.id).label("total"),
                    func.count(Submission.grade).label("graded"),
                )
                .filter(Submission.assignment_id.in_([a.id for a in assignments]))
                .group_by(Submission.assignment_id)
                .all()
            }

        result: list[dict] = []
        for a in assignments:
            total, graded = counts.get(a.id, (0, 0))
            result.append(
                {
                    **_assignment_fields(a),
                    "submission_stats": {"total": total, "pending": total - graded},
                }
            )
        return result


def _assignment_fields(a: Assignment) -> dict:
    return {
        "id": a.id,
        "course_id": a.course_id,
        "course_title": a.course_title,
        "title": a.title,
        "instructions": a.instructions,
        "deadline": a.deadline,
        "max_points": a.max_points,
        "created_at": a.created_at,
    }
