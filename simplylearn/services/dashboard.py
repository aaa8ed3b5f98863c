from sqlalchemy import func
from sqlalchemy.orm import Session

from simplylearn.core.clock import utcnow
from simplylearn.models.assignment import Assignment
from simplylearn.models.course import Course
from simplylearn.models.enrollment import Enrollment
from simplylearn.models.submission import Submission
from simplylearn.models.user import Role, User


def _count(db: Session, column, *filters) -> int:
    return int(db.query(func.count(column)).filter(*filters).scalar() or 0)


def dashboard_stats(db: Session, user: User) -> dict:
    if user.role == Role.ADMIN:
        return {
            "title": "System Overview",
            "cards": [
                {"title": "Total Users", "value": _count(db, User.id)},
                {"title": "Total Courses", "value": _count(db, Course.id)},
                {"title": "Total Assignments", "value": _count(db, Assignment.id)},
                {"title": "Submissions", "value": _count(db, Submission.id)},
            ],
        }

    if user.role == Role.TUTOR:
        courses = (
            db.query(Course)
            .filter(Course.tutor_id == user.id)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .all()
        )
        course_ids = [c.id for c in courses]

        total_students = _count(db, Enrollment.id, Enrollment.course_id.in_(course_ids))
        pending_grading = (
            db.query(func.count(Submission.id))
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .filter(Assignment.course_id.in_(course_ids), Submission.grade.is_(None))
            .scalar()
        ) or 0

        return {
            "title": "Instructor Dashboard",
            "cards": [
                {"title": "My Courses", "value": len(courses)},
                {"title": "Total Students", "value": total_students},
                {"title": "Pending Grading", "value": int(pending_grading)},
            ],
            "recent_courses": courses[:5],
        }

    enrolled = (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == user.id)
        .order_by(Course.id.asc())
        .all()
    )
    upcoming = _count(
        db,
        Assignment.id,
        Assignment.course_id.in_([c.id for c in enrolled]),
        Assignment.deadline > utcnow(),
    )
    return {
        "title": "Student Dashboard",
        "cards": [
            {"title": "Enrolled Courses", "value": len(enrolled)},
            {"title": "Upcoming Assignments", "value": upcoming},
            {"title": "Completed Submissions", "value": _count(db, Submission.id, Submission.student_id == user.id)},
        ],
        "enrolled_courses": enrolled,
    }
