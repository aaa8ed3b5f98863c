from fastapi import Response

from simplylearn.core.config import (
    ACCESS_TOKEN_EXPIRE,
    COOKIE_NAME,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
)
from simplylearn.core.security import create_access_token
from simplylearn.models.user import User


def issue_session(response: Response, user: User) -> str:
    """Sign a token for ``user`` and set it as the httpOnly session cookie."""
    token = create_access_token(data={"sub": str(user.id)})
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
        max_age=int(ACCESS_TOKEN_EXPIRE.total_seconds()),
        path="/",
    )
    return token


def clear_session(response: Response) -> None:
    response.delete_cookie(
        key=COOKIE_NAME,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
        path="/",
    )
