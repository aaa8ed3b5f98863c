from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.core.permissions import require_student
from simplylearn.models.user import User
from simplylearn.schemas.enrollment import (
    EnrollmentCheck,
    EnrollmentCreate,
    EnrollmentOut,
    EnrollmentStatusUpdate,
)
from simplylearn.services.courses import EnrollmentService

router = APIRouter()


def get_enrollment_service(db: Session = Depends(get_db)) -> EnrollmentService:
    return EnrollmentService(db)


@router.post("", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def enroll_me(
    payload: EnrollmentCreate,
    enrollments: EnrollmentService = Depends(get_enrollment_service),
    me: User = Depends(require_student),
):
    return enrollments.enroll(payload.course_id, me)


@router.get("/my", response_model=list[EnrollmentOut])
def my_enrollments(
    enrollments: EnrollmentService = Depends(get_enrollment_service),
    me: User = Depends(get_current_user),
):
    return enrollments.my_enrollments(me)


@router.get("/check/{course_id}", response_model=EnrollmentCheck)
def check_enrollment(
    course_id: int,
    enrollments: EnrollmentService = Depends(get_enrollment_service),
    me: User = Depends(get_current_user),
):
    return {"enrolled": enrollments.check(course_id, me)}


@router.patch("/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment_status(
    enrollment_id: int,
    payload: EnrollmentStatusUpdate,
    enrollments: EnrollmentService = Depends(get_enrollment_service),
    me: User = Depends(get_current_user),
):
    return enrollments.set_status(enrollment_id, payload.status, me)
