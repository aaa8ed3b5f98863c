"""
Account lifecycle: registration, email verification, login with lockout,
and profile updates.

An account is created unverified with a 6-digit code that expires after
``OTP_EXPIRE``. Login refuses unverified accounts. Every wrong password bumps
``failed_login_attempts``; reaching ``MAX_FAILED_LOGINS`` sets ``lock_until``
and from then on every attempt fails with AccountLocked until the lock
passes, whatever the password. The lock is only ever checked at login time.
"""

import hmac
import logging
import math
import secrets
from datetime import datetime

from sqlalchemy.orm import Session

from simplylearn.core.clock import as_utc, utcnow
from simplylearn.core.config import (
    LOCKOUT_DURATION,
    MAX_FAILED_LOGINS,
    OTP_EXPIRE,
    OTP_LENGTH,
)
from simplylearn.core.errors import AccountLocked, Forbidden, InvalidInput, NotFound, Unauthorized
from simplylearn.core.mailer import Mailer, otp_message
from simplylearn.core.sanitize import strip_markup
from simplylearn.core.security import hash_password, verify_password
from simplylearn.models.user import User
from simplylearn.schemas.user import ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def generate_otp() -> str:
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def lock_message(lock_until: datetime, now: datetime) -> str:
    minutes = max(1, math.ceil((lock_until - now).total_seconds() / 60))
    return f"Account locked due to too many failed attempts. Try again in {minutes} minute(s)."


class AccountService:
    def __init__(self, db: Session, mailer: Mailer):
        self.db = db
        self.mailer = mailer

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def _issue_otp(self, user: User) -> str:
        code = generate_otp()
        user.otp_code = code
        user.otp_expires_at = utcnow() + OTP_EXPIRE
        return code

    def _send_otp(self, user: User, code: str) -> None:
        subject, body = otp_message(user.name, code, int(OTP_EXPIRE.total_seconds() // 60))
        try:
            self.mailer.send(user.email, subject, body)
        except Exception:
            # the account exists either way; the user can ask for a new code
            logger.exception("Failed to send verification code to %s", user.email)

    def register(self, payload: UserCreate) -> User:
        if self.get_by_email(payload.email):
            raise InvalidInput("User already exists")

        user = User(
            name=strip_markup(payload.name) or "",
            email=payload.email,
            hashed_password=hash_password(payload.password),
            role=payload.role,
            is_verified=False,
            failed_login_attempts=0,
        )
        code = self._issue_otp(user)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)

        logger.info("Registered %s as %s", user.email, user.role.value)
        self._send_otp(user, code)
        return user

    def verify_email(self, email: str, otp: str) -> User:
        user = self.get_by_email(email)
        if not user:
            raise NotFound("User not found")
        if user.is_verified:
            raise InvalidInput("Email already verified")
        if not user.otp_code or not hmac.compare_digest(user.otp_code.encode(), otp.strip().encode()):
            raise InvalidInput("Invalid OTP")

        expires_at = as_utc(user.otp_expires_at)
        if expires_at is None or expires_at < utcnow():
            raise InvalidInput("OTP has expired")

        user.is_verified = True
        user.otp_code = None
        user.otp_expires_at = None
        self._commit()
        logger.info("Verified %s", user.email)
        return user

    def resend_otp(self, email: str) -> None:
        user = self.get_by_email(email)
        if not user:
            raise NotFound("User not found")
        if user.is_verified:
            raise InvalidInput("Email already verified")

        code = self._issue_otp(user)
        self._commit()
        self._send_otp(user, code)

    def login(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if not user:
            raise Unauthorized(INVALID_CREDENTIALS)

        now = utcnow()
        lock_until = as_utc(user.lock_until)
        if lock_until is not None:
            if lock_until > now:
                raise AccountLocked(lock_message(lock_until, now))
            # lock window has passed
            user.lock_until = None
            user.failed_login_attempts = 0

        if not verify_password(password, user.hashed_password):
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
            if user.failed_login_attempts >= MAX_FAILED_LOGINS:
                user.lock_until = now + LOCKOUT_DURATION
                user.failed_login_attempts = 0
                logger.warning("Locked %s until %s", user.email, user.lock_until.isoformat())
            self._commit()
            raise Unauthorized(INVALID_CREDENTIALS)

        if not user.is_verified:
            self._commit()
            raise Forbidden("Please verify your email first")

        user.failed_login_attempts = 0
        user.lock_until = None
        self._commit()
        return user

    def update_profile(self, user: User, payload: ProfileUpdate) -> User:
        if payload.name is not None:
            name = strip_markup(payload.name)
            if name:
                user.name = name

        if payload.email is not None and payload.email != user.email:
            if self.get_by_email(payload.email):
                raise InvalidInput("Email already in use")
            user.email = payload.email

        if payload.password:
            user.hashed_password = hash_password(payload.password)

        if payload.profile_data is not None:
            if payload.profile_data.bio is not None:
                user.bio = strip_markup(payload.profile_data.bio)
            if payload.profile_data.avatar is not None:
                user.avatar = payload.profile_data.avatar.strip()

        self._commit()
        self.db.refresh(user)
        return user
