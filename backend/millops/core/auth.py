"""Authenticated principal resolution.

The principal is resolved once per request and handed explicitly to the
services that record who did something (checker, creator).
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from millops.core.exceptions import AuthError
from millops.core.security import COOKIE_ACCESS_NAME, decode_access_token, token_from_headers
from millops.db.session import DbSession


class Principal:
    """The logged-in user as seen by the operations layer.

    Attributes:
        user_id: The user's database ID.
        email: The user's email address.
        role: Free-text operational role (Quality Control, Warehouse, ...).
    """

    def __init__(self, user_id: str, email: str, role: str, name: str = ""):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.name = name or email.split("@")[0]

    def __repr__(self) -> str:
        return f"Principal(user_id={self.user_id!r}, email={self.email!r}, role={self.role!r})"


def request_token(request: Request) -> Optional[str]:
    return token_from_headers(
        request.headers.get("Authorization"),
        request.cookies.get(COOKIE_ACCESS_NAME),
    )


def get_current_principal(request: Request, db: DbSession) -> Principal:
    """Resolve the principal from the bearer token or the access cookie."""
    from millops.models.user import User

    token = request_token(request)
    payload = decode_access_token(token) if token else None
    if payload is None:
        raise AuthError("Not authenticated")

    user = db.get(User, str(payload["sub"]))
    if user is None or not user.is_active:
        raise AuthError("User account is disabled or no longer exists")

    return Principal(
        user_id=user.id,
        email=user.email,
        role=user.role,
        name=user.display_name,
    )


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
