"""
HTTP routers for EduHub, collected under one `api_router` that the app
mounts at API_V1_STR.

- auth: signup, login, profile and password, logout
- courses: catalog, course management, enrollment, completion and reviews
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .courses import router as courses_router


api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(courses_router, prefix="/courses", tags=["courses"])


__all__ = ["api_router", "auth_router", "courses_router"]
