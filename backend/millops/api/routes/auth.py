"""Authentication routes."""

import logging

from fastapi import APIRouter, Request, Response

from millops.core.auth import CurrentPrincipal, request_token
from millops.core.exceptions import NotFoundError
from millops.core.rate_limit import LOGIN_LIMIT, READ_LIMIT, WRITE_LIMIT, limiter
from millops.core.security import (
    ACCESS_TOKEN_MAX_AGE,
    COOKIE_ACCESS_NAME,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    blacklist_token,
    create_access_token,
)
from millops.db.session import DbSession
from millops.models.user import User
from millops.schemas.auth import LoginRequest, RegisterRequest, Token
from millops.schemas.common import MessageResponse
from millops.schemas.user import UserResponse
from millops.services import user_service

logger = logging.getLogger("auth")

router = APIRouter()


def _issue_token(response: Response, user: User) -> Token:
    token = create_access_token(
        data={"sub": str(user.id), "email": user.email, "role": user.role}
    )
    response.set_cookie(
        key=COOKIE_ACCESS_NAME,
        value=token,
        max_age=ACCESS_TOKEN_MAX_AGE,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite=COOKIE_SAMESITE,
    )
    return Token(access_token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=Token, status_code=201)
@limiter.limit(LOGIN_LIMIT)
def register(request: Request, response: Response, body: RegisterRequest, db: DbSession):
    """Create an account and log it in."""
    user = user_service.register_user(db, body)
    return _issue_token(response, user)


@router.post("/login", response_model=Token)
@limiter.limit(LOGIN_LIMIT)
def login(request: Request, response: Response, login_request: LoginRequest, db: DbSession):
    """Authenticate user and return JWT token."""
    client_ip = request.client.host if request.client else "unknown"
    user = user_service.authenticate(db, login_request.email, login_request.password, client_ip)
    return _issue_token(response, user)


@router.post("/logout", response_model=MessageResponse)
@limiter.limit(WRITE_LIMIT)
def logout(request: Request, response: Response, principal: CurrentPrincipal):
    """Revoke the current token and clear the session cookie."""
    token = request_token(request)
    if token:
        blacklist_token(token)
    response.delete_cookie(COOKIE_ACCESS_NAME, samesite=COOKIE_SAMESITE, secure=COOKIE_SECURE)
    logger.info(f"User logged out: {principal.email} (ID: {principal.user_id})")
    return {"message": "Logged out successfully"}


@router.get("/user", response_model=UserResponse)
@limiter.limit(READ_LIMIT)
def current_user(request: Request, principal: CurrentPrincipal, db: DbSession):
    """Profile of the logged-in user."""
    user = db.get(User, principal.user_id)
    if user is None:
        raise NotFoundError("User", principal.user_id)
    return user
