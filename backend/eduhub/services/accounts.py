"""
Account service for EduHub.

Signup, login, profile maintenance and bearer-token authentication.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduhub.core.exceptions import (
    AuthenticationError,
    AccountDeactivated,
    AccountNotFound,
    DuplicateEmail,
    InvalidCredentials,
    InvalidToken,
    ValidationError,
)
from eduhub.core.security import (
    create_access_token,
    get_password_hash,
    get_token_subject,
    verify_password,
)
from eduhub.models.user import User, UserRole


logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "bio", "avatar", "social_links")
REQUIRED_PROFILE_FIELDS = ("name", "social_links")
MIN_PASSWORD_LENGTH = 6


def issue_token(user: User) -> str:
    """Create the bearer token handed out at signup and login."""
    return create_access_token(subject=user.id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def signup(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: str = UserRole.STUDENT.value,
    **profile: Any
) -> Tuple[User, str]:
    """
    Register a new account and issue its first token.

    Raises:
        ValidationError: password too short
        DuplicateEmail: the email is already registered
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters long")

    email = email.strip().lower()
    if get_user_by_email(db, email):
        raise DuplicateEmail()

    user = User(
        name=name.strip(),
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
        is_active=True,
        last_login_at=datetime.now(timezone.utc),
        **profile
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info(f"User registered: {user.email} (id={user.id}, role={user.role})")
    return user, issue_token(user)


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    """
    Check credentials, stamp the login time and issue a token.

    Raises:
        InvalidCredentials: unknown email or wrong password
        AccountDeactivated: the account has been switched off
    """
    user = get_user_by_email(db, email)
    if not user:
        logger.warning(f"Login failed for unknown email {email}")
        raise InvalidCredentials()

    if not user.is_active:
        logger.warning(f"Login refused for deactivated account {user.id}")
        raise AccountDeactivated()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed for user {user.id}: invalid password")
        raise InvalidCredentials()

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.info(f"User logged in: {user.id}")
    return user, issue_token(user)


def update_profile(db: Session, user: User, updates: Dict[str, Any]) -> User:
    """
    Apply profile changes. Only name, bio, avatar, social links and email are
    writable; changing the email clears its verified flag.

    Raises:
        DuplicateEmail: the new email belongs to another account
    """
    for field in PROFILE_FIELDS:
        if field not in updates:
            continue
        value = updates[field]
        if value is None and field in REQUIRED_PROFILE_FIELDS:
            continue
        setattr(user, field, value)

    new_email = updates.get("email")
    if new_email:
        new_email = new_email.strip().lower()
        if new_email != user.email:
            if get_user_by_email(db, new_email):
                raise DuplicateEmail("Email already in use")
            user.email = new_email
            user.email_verified = False

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail("Email already in use")
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """
    Raises:
        InvalidCredentials: the current password does not match
        ValidationError: the new password is too short
    """
    if not verify_password(current_password, user.hashed_password):
        raise InvalidCredentials("Current password is incorrect")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("New password must be at least 6 characters long")

    user.hashed_password = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password changed for user {user.id}")


def authenticate(db: Session, token: Optional[str]) -> User:
    """
    Resolve a bearer token to its active account.

    Raises:
        AuthenticationError: no token supplied
        InvalidToken: bad signature, expired, or no usable subject
        AccountNotFound: the account no longer exists
        AccountDeactivated: the account is inactive
    """
    if not token:
        raise AuthenticationError("Not authorized, no token")

    user_id = get_token_subject(token)
    if user_id is None:
        raise InvalidToken()

    user = db.get(User, user_id)
    if user is None:
        raise AccountNotFound()

    if not user.is_active:
        raise AccountDeactivated()

    return user


def optional_authenticate(db: Session, token: Optional[str]) -> Optional[User]:
    """Like `authenticate`, but any failure means an anonymous caller."""
    try:
        return authenticate(db, token)
    except AuthenticationError:
        return None
