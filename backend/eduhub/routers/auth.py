"""
Authentication router for EduHub.

Handles signup, login, profile maintenance and logout, and provides the
bearer-token dependencies used by the other routers.
"""

from typing import Optional, Dict, Any
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from eduhub.core.config import settings
from eduhub.core.database import get_db
from eduhub.models.user import User
from eduhub.schemas.auth import UserSignup, UserLogin, ProfileUpdate, PasswordChange
from eduhub.services import accounts


router = APIRouter()

# OAuth2 scheme for token authentication; missing tokens are reported by
# `accounts.authenticate` so the error body stays {"error": ...}
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)


# Dependencies
def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token.
    """
    return accounts.authenticate(db, token)


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get the caller if a valid token was sent, otherwise None.
    """
    return accounts.optional_authenticate(db, token)


def _session_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "enrolledCourses": [course.id for course in user.enrolled_courses],
        "lastLogin": user.last_login_at.isoformat() if user.last_login_at else None,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


# Endpoints
@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserSignup,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Register a new student account.
    """
    user, token = accounts.signup(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password
    )

    return {
        "success": True,
        "message": "User registered successfully",
        "token": token,
        "user": _session_user(user)
    }


@router.post("/login")
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Login with email and password.
    """
    user, token = accounts.login(db, credentials.email, credentials.password)

    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": _session_user(user)
    }


@router.get("/me")
async def get_me(
    current_user: User = Depends(get_current_user)
) -> Dict[str, Any]:
    """
    Get current user's profile with enrolled and completed courses.
    """
    return {
        "success": True,
        "user": current_user.to_dict(include_courses=True)
    }


@router.put("/profile")
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update the caller's profile.
    """
    updates = profile_data.model_dump(exclude_unset=True)
    user = accounts.update_profile(db, current_user, updates)

    return {
        "success": True,
        "message": "Profile updated successfully",
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "bio": user.bio,
            "avatar": user.avatar,
            "socialLinks": user.social_links or {},
            "emailVerified": user.email_verified
        }
    }


@router.put("/password")
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Change the caller's password.
    """
    accounts.change_password(
        db,
        current_user,
        password_data.current_password,
        password_data.new_password
    )

    return {
        "success": True,
        "message": "Password updated successfully"
    }


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_user)
) -> Dict[str, Any]:
    """
    Logout endpoint. Tokens are stateless, so the client discards its copy.
    """
    return {
        "success": True,
        "message": "Logged out successfully"
    }
