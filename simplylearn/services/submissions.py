import logging
from datetime import datetime
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from simplylearn.core.clock import as_utc, utcnow
from simplylearn.core.errors import Forbidden, InvalidInput, NotFound
from simplylearn.core.permissions import can_manage_course
from simplylearn.core.sanitize import strip_markup
from simplylearn.core.uploads import UploadStore
from simplylearn.models.assignment import Assignment
from simplylearn.models.submission import Submission
from simplylearn.models.user import User
from simplylearn.services.courses import is_enrolled

logger = logging.getLogger(__name__)


def late_status(deadline: Optional[datetime], submitted_at: datetime) -> tuple[bool, Optional[int]]:
    """
    Returns: (is_late, late_by_minutes)

    Late means strictly after the deadline; a submission stamped exactly at
    the deadline is on time.
    """
    if deadline is None:
        return (False, None)

    due = as_utc(deadline)
    submitted = as_utc(submitted_at)

    if submitted <= due:
        return (False, None)

    return (True, int((submitted - due).total_seconds() // 60))


def attach_late_fields(sub: Submission, assignment: Assignment) -> Submission:
    sub.is_late, sub.late_by_minutes = late_status(assignment.deadline, sub.submitted_at)
    return sub


def ensure_assignment_exists(db: Session, assignment_id: int) -> Assignment:
    a = db.get(Assignment, assignment_id)
    if not a:
        raise NotFound("Assignment not found")
    return a


class SubmissionService:
    def __init__(self, db: Session, uploads: UploadStore | None = None):
        self.db = db
        self.uploads = uploads

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _find(self, assignment_id: int, student_id: int) -> Optional[Submission]:
        return (
            self.db.query(Submission)
            .filter(
                Submission.assignment_id == assignment_id,
                Submission.student_id == student_id,
            )
            .first()
        )

    def _discard(self, url: Optional[str]) -> None:
        if url and self.uploads is not None:
            self.uploads.delete(url)

    def submit(
        self,
        assignment_id: int,
        student: User,
        text_entry: Optional[str] = None,
        file: Optional[UploadFile] = None,
        file_url: Optional[str] = None,
    ) -> tuple[Submission, bool]:
        """Create or overwrite the student's submission; returns (submission, created)."""
        assignment = ensure_assignment_exists(self.db, assignment_id)
        if not is_enrolled(self.db, assignment.course_id, student.id):
            raise Forbidden("Not enrolled in this course")

        text = strip_markup(text_entry) or None
        stored = None
        if file is not None and file.filename:
            if self.uploads is None:
                raise InvalidInput("File uploads are not available")
            file_url = stored = self.uploads.save(file)
        else:
            file_url = file_url.strip() if file_url and file_url.strip() else None

        now = utcnow()
        existing = self._find(assignment_id, student.id)

        if existing is None:
            if not text and not file_url:
                raise InvalidInput("Submission must include a file or a text entry")

            s = Submission(
                assignment_id=assignment_id,
                student_id=student.id,
                file_url=file_url,
                text_entry=text,
                submitted_at=now,
            )
            self.db.add(s)
            try:
                self.db.commit()
            except IntegrityError:
                # another request inserted the same pair first; overwrite that row
                self.db.rollback()
                existing = self._find(assignment_id, student.id)
                if existing is None:
                    self._discard(stored)
                    raise
            except Exception:
                self.db.rollback()
                self._discard(stored)
                raise
            else:
                self.db.refresh(s)
                logger.info("Submission %s for assignment %s", s.id, assignment_id)
                return attach_late_fields(s, assignment), True

        # resubmission: overwrite in place, keep old parts that were not resent
        replaced = existing.file_url if file_url and existing.file_url != file_url else None
        existing.file_url = file_url or existing.file_url
        existing.text_entry = text or existing.text_entry
        existing.submitted_at = now
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self._discard(stored)
            raise
        self._discard(replaced)
        self.db.refresh(existing)
        logger.info("Resubmission %s for assignment %s", existing.id, assignment_id)
        return attach_late_fields(existing, assignment), False

    def list_for_assignment(self, assignment_id: int, user: User) -> list[Submission]:
        assignment = ensure_assignment_exists(self.db, assignment_id)
        if not can_manage_course(user, assignment.course.tutor_id):
            raise Forbidden("Only the course tutor can view submissions")

        subs = (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id)
            .order_by(Submission.submitted_at.asc(), Submission.id.asc())
            .all()
        )
        return [attach_late_fields(s, assignment) for s in subs]

    def my_submission(self, assignment_id: int, student: User) -> Optional[Submission]:
        assignment = ensure_assignment_exists(self.db, assignment_id)
        sub = self._find(assignment_id, student.id)
        if sub is None:
            return None
        return attach_late_fields(sub, assignment)

    def grade(
        self,
        submission_id: int,
        grade: float,
        feedback: Optional[str],
        grader: User,
    ) -> Submission:
        sub = self.db.get(Submission, submission_id)
        if not sub:
            raise NotFound("Submission not found")

        assignment = sub.assignment
        if not can_manage_course(grader, assignment.course.tutor_id):
            raise Forbidden("Only the course tutor can grade")

        if grade < 0 or grade > assignment.max_points:
            raise InvalidInput(f"grade must be between 0 and {assignment.max_points:g}")

        sub.grade = grade
        sub.feedback = strip_markup(feedback) or None
        sub.graded_at = utcnow()
        self._commit()
        self.db.refresh(sub)

        logger.info("Submission %s graded %s by %s", sub.id, grade, grader.email)
        return attach_late_fields(sub, assignment)
