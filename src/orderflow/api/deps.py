"""Request dependencies: the caller's identity.

Authentication is done by the gateway in front of this service, which
forwards the verified identity in headers.
"""

from fastapi import Depends, Header

from orderflow.errors import UnauthenticatedError, UnauthorizedError
from orderflow.identity.user import User
from orderflow.utils.logging import add_context


def current_user(
    x_user_id: str = Header(default=""),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_roles: str = Header(default="CUSTOMER"),
) -> User:
    if not x_user_id:
        raise UnauthenticatedError()

    roles = frozenset(role.strip().upper() for role in x_user_roles.split(",") if role.strip())
    add_context(user_id=x_user_id)
    return User(id=x_user_id, email=x_user_email, username=x_user_name, roles=roles)


def florist_user(user: User = Depends(current_user)) -> User:
    if not user.is_florist:
        raise UnauthorizedError()
    return user
