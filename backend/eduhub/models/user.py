"""
User model for EduHub.

Defines the User table with authentication fields, role, profile information,
and the enrollment/completion relations to courses.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
from sqlalchemy import (
    Boolean, Integer, String, DateTime, Text, JSON, Index, CheckConstraint
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from eduhub.core.database import Base


class UserRole(str, Enum):
    """Roles an account can hold."""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class User(Base):
    """
    User model for authentication and profile management.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Authentication fields
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.STUDENT.value,
        nullable=False
    )

    # Profile fields
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    social_links: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    # Status fields
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="user", cascade="all, delete-orphan")
    completions = relationship("CourseCompletion", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")

    # Read-only views over the enrollment/completion rows
    enrolled_courses = relationship(
        "Course",
        secondary="enrollments",
        viewonly=True,
        order_by="Course.id"
    )
    completed_courses = relationship(
        "Course",
        secondary="course_completions",
        viewonly=True,
        order_by="Course.id"
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint("role IN ('student', 'instructor', 'admin')", name="check_user_role"),
        Index("idx_user_email_active", "email", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def total_enrolled_courses(self) -> int:
        return len(self.enrolled_courses)

    @property
    def total_completed_courses(self) -> int:
        return len(self.completed_courses)

    def is_enrolled_in(self, course_id: int) -> bool:
        return any(course.id == course_id for course in self.enrolled_courses)

    def has_completed(self, course_id: int) -> bool:
        return any(course.id == course_id for course in self.completed_courses)

    def to_dict(self, include_courses: bool = False) -> dict:
        """Convert user to dictionary representation. The password hash is never included."""
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "bio": self.bio,
            "avatar": self.avatar,
            "socialLinks": self.social_links or {},
            "isActive": self.is_active,
            "emailVerified": self.email_verified,
            "enrolledCourses": [course.id for course in self.enrolled_courses],
            "lastLogin": self.last_login_at.isoformat() if self.last_login_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

        if include_courses:
            data.update({
                "enrolledCourses": [
                    {
                        "id": course.id,
                        "title": course.title,
                        "instructor": course.instructor,
                        "thumbnail": course.thumbnail,
                        "price": course.price,
                    }
                    for course in self.enrolled_courses
                ],
                "completedCourses": [
                    {
                        "id": course.id,
                        "title": course.title,
                        "instructor": course.instructor,
                        "thumbnail": course.thumbnail,
                    }
                    for course in self.completed_courses
                ],
                "totalEnrolledCourses": self.total_enrolled_courses,
                "totalCompletedCourses": self.total_completed_courses,
            })

        return data
