"""
Request schemas for the authentication endpoints.
"""

from typing import Optional
from pydantic import EmailStr, field_validator

from .base import CamelModel


def _normalize_email(v: str) -> str:
    return v.strip().lower()


def _check_name(v: str) -> str:
    v = v.strip()
    if not 2 <= len(v) <= 100:
        raise ValueError("Name must be between 2 and 100 characters")
    return v


class UserSignup(CamelModel):
    name: str
    email: EmailStr
    password: str

    normalize_email = field_validator("email")(_normalize_email)
    check_name = field_validator("name")(_check_name)

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v


class UserLogin(CamelModel):
    email: EmailStr
    password: str

    normalize_email = field_validator("email")(_normalize_email)

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class SocialLinks(CamelModel):
    website: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    social_links: Optional[SocialLinks] = None

    @field_validator("name")
    @classmethod
    def name_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v) if v is not None else v

    @field_validator("email")
    @classmethod
    def email_lower(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v) if v is not None else v

    @field_validator("bio")
    @classmethod
    def bio_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 500:
            raise ValueError("Bio cannot exceed 500 characters")
        return v


class PasswordChange(CamelModel):
    current_password: str
    new_password: str

    @field_validator("current_password")
    @classmethod
    def current_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def new_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("New password must be at least 6 characters long")
        return v
