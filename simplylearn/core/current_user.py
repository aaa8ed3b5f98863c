import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from simplylearn.core.config import COOKIE_NAME
from simplylearn.core.deps import get_db
from simplylearn.core.errors import Unauthorized
from simplylearn.core.security import decode_access_token
from simplylearn.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    # cookie first, bearer header for non-browser clients
    token = request.cookies.get(COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise Unauthorized("Not authorized, no token")

    claims = decode_access_token(token)
    if claims is None:
        raise Unauthorized("Not authorized, token failed")

    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Not authorized, token failed")

    user = db.get(User, user_id)
    if user is None:
        logger.warning("Token for unknown user id %s", user_id)
        raise Unauthorized("Not authorized, user not found")
    return user
