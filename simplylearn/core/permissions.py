from fastapi import Depends

from simplylearn.core.current_user import get_current_user
from simplylearn.core.errors import Forbidden
from simplylearn.models.user import Role, User


def require_roles(*roles: Role):
    allowed = frozenset(roles)

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise Forbidden("Not authorized to perform this action")
        return current_user

    return dependency


require_student = require_roles(Role.STUDENT)
require_staff = require_roles(Role.TUTOR, Role.ADMIN)


def can_manage_course(user: User, tutor_id: int) -> bool:
    """Course owner or any admin."""
    if user.role == Role.ADMIN:
        return True
    return user.role == Role.TUTOR and user.id == tutor_id
