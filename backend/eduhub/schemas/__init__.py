"""
Request schemas for EduHub.
"""

from .auth import UserSignup, UserLogin, ProfileUpdate, PasswordChange, SocialLinks
from .course import CourseCreate, CourseUpdate, LessonIn, LessonResource, ReviewCreate

__all__ = [
    "UserSignup",
    "UserLogin",
    "ProfileUpdate",
    "PasswordChange",
    "SocialLinks",
    "CourseCreate",
    "CourseUpdate",
    "LessonIn",
    "LessonResource",
    "ReviewCreate"
]
