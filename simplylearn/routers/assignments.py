from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db
from simplylearn.core.permissions import require_staff, require_student
from simplylearn.models.user import User
from simplylearn.schemas.assignment import (
    AssignmentCreate,
    AssignmentRead,
    StudentAssignmentRow,
    TutorAssignmentRow,
)
from simplylearn.services.assignments import AssignmentService

router = APIRouter()


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)


@router.get("/student/my", response_model=list[StudentAssignmentRow])
def my_assignments(
    assignments: AssignmentService = Depends(get_assignment_service),
    me: User = Depends(require_student),
):
    return assignments.student_assignments(me)


@router.get("/tutor/my", response_model=list[TutorAssignmentRow])
def tutor_assignments(
    assignments: AssignmentService = Depends(get_assignment_service),
    me: User = Depends(require_staff),
):
    return assignments.tutor_assignments(me)


@router.get("/course/{course_id}", response_model=list[AssignmentRead])
def list_assignments(
    course_id: int,
    assignments: AssignmentService = Depends(get_assignment_service),
    current_user: User = Depends(get_current_user),
):
    return assignments.list_for_course(course_id, current_user)


@router.get("/{assignment_id}", response_model=AssignmentRead)
def get_assignment(
    assignment_id: int,
    assignments: AssignmentService = Depends(get_assignment_service),
    current_user: User = Depends(get_current_user),
):
    return assignments.get(assignment_id, current_user)


@router.post("", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    assignments: AssignmentService = Depends(get_assignment_service),
    staff: User = Depends(require_staff),
):
    return assignments.create(payload, staff)
