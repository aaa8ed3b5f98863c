from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session

from simplylearn.core.deps import get_db, get_upload_store
from simplylearn.core.permissions import require_staff, require_student
from simplylearn.core.uploads import UploadStore
from simplylearn.models.user import User
from simplylearn.schemas.submission import (
    SubmissionGradeUpdate,
    SubmissionRead,
    SubmissionWithStudent,
)
from simplylearn.services.submissions import SubmissionService

router = APIRouter()


def get_submission_service(
    db: Session = Depends(get_db),
    uploads: UploadStore = Depends(get_upload_store),
) -> SubmissionService:
    return SubmissionService(db, uploads)


@router.post(
    "",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"description": "Existing submission overwritten"},
        400: {"description": "Empty submission or disallowed file type"},
    },
)
def submit_assignment(
    response: Response,
    assignment_id: int = Form(...),
    text_entry: Optional[str] = Form(None),
    file_url: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    submissions: SubmissionService = Depends(get_submission_service),
    me: User = Depends(require_student),
):
    sub, created = submissions.submit(
        assignment_id,
        me,
        text_entry=text_entry,
        file=file,
        file_url=file_url,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return sub


@router.get("/assignment/{assignment_id}", response_model=list[SubmissionWithStudent])
def list_submissions_for_assignment(
    assignment_id: int,
    submissions: SubmissionService = Depends(get_submission_service),
    staff: User = Depends(require_staff),
):
    return submissions.list_for_assignment(assignment_id, staff)


@router.get("/my/{assignment_id}", response_model=Optional[SubmissionRead])
def my_submission(
    assignment_id: int,
    submissions: SubmissionService = Depends(get_submission_service),
    me: User = Depends(require_student),
):
    return submissions.my_submission(assignment_id, me)


@router.put("/{submission_id}/grade", response_model=SubmissionRead)
def grade_submission(
    submission_id: int,
    payload: SubmissionGradeUpdate,
    submissions: SubmissionService = Depends(get_submission_service),
    staff: User = Depends(require_staff),
):
    return submissions.grade(submission_id, payload.grade, payload.feedback, staff)
