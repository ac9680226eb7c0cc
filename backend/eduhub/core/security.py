"""
Password hashing and bearer tokens for EduHub.

Tokens are HS256 JWTs whose subject is the account id.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import settings


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str | int,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None
) -> str:
    """
    Issue a signed token for `subject`.

    Args:
        subject: account id, stored as a string in the `sub` claim
        expires_delta: lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        additional_claims: extra claims merged into the payload

    Returns:
        str: the encoded token
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims: Dict[str, Any] = {
        "sub": str(subject),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    claims.update(additional_claims or {})

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode `token`, checking signature and expiry.

    Returns the claims, or None when the token cannot be trusted.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def get_token_subject(token: str) -> Optional[int]:
    """Account id carried by a valid token, or None."""
    claims = verify_token(token)
    if not claims:
        return None

    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        return None
