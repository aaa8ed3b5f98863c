from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.core.permissions import require_staff
from simplylearn.models.user import User
from simplylearn.schemas.course import CourseCreate, CourseRead, CourseUpdate
from simplylearn.services.courses import CourseService

router = APIRouter()


def get_course_service(db: Session = Depends(get_db)) -> CourseService:
    return CourseService(db)


@router.get("", response_model=list[CourseRead])
def list_courses(
    courses: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
):
    return courses.list_courses()


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    courses: CourseService = Depends(get_course_service),
    tutor: User = Depends(require_staff),
):
    return courses.create(payload, tutor)


@router.get("/{course_id}", response_model=CourseRead)
def get_course(
    course_id: int,
    courses: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
):
    return courses.get(course_id)


@router.put("/{course_id}", response_model=CourseRead)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    courses: CourseService = Depends(get_course_service),
    current_user: User = Depends(get_current_user),
):
    return courses.update(course_id, payload, current_user)
