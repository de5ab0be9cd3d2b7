"""User accounts and credential checks."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from millops.core.exceptions import AuthError, ConstraintError
from millops.core.security import get_password_hash, verify_password
from millops.models.user import User
from millops.schemas.auth import RegisterRequest
from millops.services.persistence import transaction

logger = logging.getLogger("auth")


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def register_user(db: Session, data: RegisterRequest) -> User:
    if get_user_by_email(db, data.email) is not None:
        raise ConstraintError("A user with this email already exists")

    with transaction(db, "User"):
        user = User(
            email=data.email.lower(),
            password_hash=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role,
            profile_image_url=data.profile_image_url,
        )
        db.add(user)
    db.refresh(user)
    logger.info(f"User registered: {user.email} (ID: {user.id}, role: {user.role})")
    return user


def authenticate(db: Session, email: str, password: str, client_ip: str = "unknown") -> User:
    """Return the user for valid credentials.

    Raises:
        AuthError: unknown email, wrong password or inactive account.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for email: {email} from IP: {client_ip}")
        raise AuthError("Invalid email or password")
    if not user.is_active:
        logger.warning(f"Login attempt for inactive user: {email} (ID: {user.id}) from IP: {client_ip}")
        raise AuthError("User account is inactive")

    logger.info(f"Successful login: {user.email} (ID: {user.id}, role: {user.role}) from IP: {client_ip}")
    return user
