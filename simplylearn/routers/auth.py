from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from simplylearn.core.current_user import get_current_user
from simplylearn.core.deps import get_db, get_mailer
from simplylearn.core.mailer import Mailer
from simplylearn.core.session import clear_session, issue_session
from simplylearn.models.user import User
from simplylearn.schemas.auth import LoginRequest, MessageOut, ResendOtpRequest, VerifyEmailRequest
from simplylearn.schemas.user import ProfileUpdate, UserCreate, UserRead, UserSession
from simplylearn.services.accounts import AccountService

router = APIRouter()


def get_account_service(
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
) -> AccountService:
    return AccountService(db, mailer)


def _session_body(user: User, token: str) -> dict:
    return {**UserRead.model_validate(user).model_dump(), "access_token": token}


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "User already exists or invalid input"},
    },
)
def register(payload: UserCreate, accounts: AccountService = Depends(get_account_service)):
    return accounts.register(payload)


@router.post(
    "/verify-email",
    response_model=UserSession,
    responses={
        400: {"description": "Invalid or expired OTP"},
        404: {"description": "User not found"},
    },
)
def verify_email(
    payload: VerifyEmailRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
):
    user = accounts.verify_email(payload.email, payload.otp)
    token = issue_session(response, user)
    return _session_body(user, token)


@router.post("/resend-otp", response_model=MessageOut)
def resend_otp(payload: ResendOtpRequest, accounts: AccountService = Depends(get_account_service)):
    accounts.resend_otp(payload.email)
    return {"message": "A new verification code has been sent"}


@router.post(
    "/login",
    response_model=UserSession,
    responses={
        401: {"description": "Invalid email or password"},
        403: {"description": "Account locked or email not verified"},
    },
)
def login(
    payload: LoginRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
):
    user = accounts.login(payload.email, payload.password)
    token = issue_session(response, user)
    return _session_body(user, token)


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageOut)
def logout(response: Response):
    clear_session(response)
    return {"message": "Logged out"}


@router.get("/profile", response_model=UserRead)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserSession)
def update_profile(
    payload: ProfileUpdate,
    response: Response,
    current_user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
):
    user = accounts.update_profile(current_user, payload)
    token = issue_session(response, user)
    return _session_body(user, token)
