"""
Database models for EduHub.

This module contains all SQLAlchemy models for the application:
- User model for authentication and profiles
- Course models for the catalog (courses, lessons, reviews)
- Enrollment models for the account <-> course relations
"""

from eduhub.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .course import Course, Lesson, Review, CourseCategory, CourseLevel, ResourceType
from .enrollment import Enrollment, CourseCompletion

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Course",
    "Lesson",
    "Review",
    "CourseCategory",
    "CourseLevel",
    "ResourceType",
    "Enrollment",
    "CourseCompletion"
]
