from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.core.permissions import require_staff, require_student
from simplylearn.models.quiz import Quiz
from simplylearn.models.user import User
from simplylearn.schemas.quiz import (
    QuizCreate,
    QuizPublic,
    QuizRead,
    QuizResultRead,
    QuizSubmit,
)
from simplylearn.services.quizzes import QuizService

router = APIRouter()


def get_quiz_service(db: Session = Depends(get_db)) -> QuizService:
    return QuizService(db)


def _render(quiz: Quiz, user: User) -> dict:
    # students never see the answer key
    schema = QuizRead if QuizService.shows_answer_key(quiz, user) else QuizPublic
    return schema.model_validate(quiz).model_dump()


@router.post("", response_model=QuizRead, status_code=status.HTTP_201_CREATED)
def create_quiz(
    payload: QuizCreate,
    quizzes: QuizService = Depends(get_quiz_service),
    staff: User = Depends(require_staff),
):
    return quizzes.create(payload, staff)


@router.get("/course/{course_id}", response_model=list[QuizRead | QuizPublic])
def list_quizzes(
    course_id: int,
    quizzes: QuizService = Depends(get_quiz_service),
    current_user: User = Depends(get_current_user),
):
    return [_render(q, current_user) for q in quizzes.list_for_course(course_id, current_user)]


@router.get("/{quiz_id}", response_model=QuizRead | QuizPublic)
def get_quiz(
    quiz_id: int,
    quizzes: QuizService = Depends(get_quiz_service),
    current_user: User = Depends(get_current_user),
):
    return _render(quizzes.get(quiz_id, current_user), current_user)


@router.post(
    "/{quiz_id}/submit",
    response_model=QuizResultRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_quiz(
    quiz_id: int,
    payload: QuizSubmit,
    quizzes: QuizService = Depends(get_quiz_service),
    me: User = Depends(require_student),
):
    return quizzes.submit(quiz_id, me, payload.answers)


@router.get("/{quiz_id}/results", response_model=list[QuizResultRead])
def quiz_results(
    quiz_id: int,
    quizzes: QuizService = Depends(get_quiz_service),
    current_user: User = Depends(get_current_user),
):
    return quizzes.results(quiz_id, current_user)
