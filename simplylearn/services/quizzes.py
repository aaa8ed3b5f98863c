import logging

from sqlalchemy.orm import Session

from simplylearn.core.clock import utcnow
from simplylearn.core.errors import Forbidden, InvalidInput, NotFound
from simplylearn.core.permissions import can_manage_course
from simplylearn.core.sanitize import strip_markup
from simplylearn.models.quiz import Quiz, QuizQuestion, QuizResult
from simplylearn.models.user import Role, User
from simplylearn.schemas.quiz import QuizCreate
from simplylearn.services.courses import (
    ensure_course_exists,
    ensure_course_manager,
    ensure_course_member,
    is_enrolled,
)

logger = logging.getLogger(__name__)


def score_answers(questions: list[QuizQuestion], answers: dict[int, int]) -> tuple[int, int, float]:
    """
    Returns: (score, total_questions, percentage)

    ``answers`` maps question position to the chosen option index; a missing
    answer counts as wrong. Percentage is rounded to 2 places, 0 for an empty quiz.
    """
    total = len(questions)
    score = sum(1 for q in questions if answers.get(q.position) == q.correct_option_index)
    percentage = round(score / total * 100, 2) if total else 0.0
    return score, total, percentage


class QuizService:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _get(self, quiz_id: int) -> Quiz:
        quiz = self.db.get(Quiz, quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    def create(self, payload: QuizCreate, user: User) -> Quiz:
        course = ensure_course_exists(self.db, payload.course_id)
        ensure_course_manager(course, user, "add quizzes to")

        quiz = Quiz(
            course_id=course.id,
            title=payload.title.strip(),
            timer_limit=payload.timer_limit,
        )
        for position, q in enumerate(payload.questions):
            quiz.questions.append(
                QuizQuestion(
                    position=position,
                    question_text=strip_markup(q.question_text),
                    options=[o.strip() for o in q.options],
                    correct_option_index=q.correct_option_index,
                    type=q.type,
                )
            )
        self.db.add(quiz)
        self._commit()
        self.db.refresh(quiz)
        logger.info("Quiz %s created in course %s", quiz.id, course.id)
        return quiz

    def list_for_course(self, course_id: int, user: User) -> list[Quiz]:
        course = ensure_course_exists(self.db, course_id)
        ensure_course_member(self.db, course, user)
        return (
            self.db.query(Quiz)
            .filter(Quiz.course_id == course_id)
            .order_by(Quiz.id.asc())
            .all()
        )

    def get(self, quiz_id: int, user: User) -> Quiz:
        quiz = self._get(quiz_id)
        ensure_course_member(self.db, quiz.course, user)
        return quiz

    def submit(self, quiz_id: int, student: User, answers: dict[int, int]) -> QuizResult:
        quiz = self._get(quiz_id)
        if student.role == Role.STUDENT and not is_enrolled(self.db, quiz.course_id, student.id):
            raise Forbidden("Not enrolled in this course")

        positions = {q.position for q in quiz.questions}
        unknown = sorted(set(answers) - positions)
        if unknown:
            raise InvalidInput(f"Unknown question index: {unknown[0]}")

        score, total, percentage = score_answers(quiz.questions, answers)

        # every attempt is kept as its own result
        result = QuizResult(
            quiz_id=quiz.id,
            student_id=student.id,
            answers={str(k): v for k, v in answers.items()},
            score=score,
            total_questions=total,
            percentage=percentage,
            submitted_at=utcnow(),
        )
        self.db.add(result)
        self._commit()
        self.db.refresh(result)
        logger.info("Quiz %s result %s: %s/%s", quiz.id, result.id, score, total)
        return result

    def results(self, quiz_id: int, user: User) -> list[QuizResult]:
        quiz = self._get(quiz_id)
        query = self.db.query(QuizResult).filter(QuizResult.quiz_id == quiz.id)
        if not can_manage_course(user, quiz.course.tutor_id):
            ensure_course_member(self.db, quiz.course, user)
            query = query.filter(QuizResult.student_id == user.id)
        return query.order_by(QuizResult.submitted_at.desc(), QuizResult.id.desc()).all()

    @staticmethod
    def shows_answer_key(quiz: Quiz, user: User) -> bool:
        return can_manage_course(user, quiz.course.tutor_id)
