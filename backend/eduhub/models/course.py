"""
Course models for EduHub.

Defines Course, Lesson and Review models for the catalog, plus the closed
category/level enumerations.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from enum import Enum
from sqlalchemy import (
    Boolean, Integer, String, DateTime, Text, Float,
    ForeignKey, UniqueConstraint, Index, CheckConstraint, JSON
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from eduhub.core.database import Base


class CourseCategory(str, Enum):
    """Catalog categories."""
    PROGRAMMING = "Programming"
    DATA_SCIENCE = "Data Science"
    DESIGN = "Design"
    BUSINESS = "Business"
    MARKETING = "Marketing"
    PHOTOGRAPHY = "Photography"
    MUSIC = "Music"
    LANGUAGE = "Language"
    HEALTH = "Health"
    SCIENCE = "Science"
    MATHEMATICS = "Mathematics"
    OTHER = "Other"


class CourseLevel(str, Enum):
    """Difficulty levels for courses."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ResourceType(str, Enum):
    """Kinds of lesson resources."""
    PDF = "pdf"
    LINK = "link"
    DOWNLOAD = "download"
    OTHER = "other"


class Course(Base):
    """
    Course model representing a catalog entry.
    """
    __tablename__ = "courses"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Basic information
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Instructor: free-text display name plus optional owning account
    instructor: Mapped[str] = mapped_column(String(100), nullable=False)
    instructor_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Course metadata
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    level: Mapped[str] = mapped_column(String(20), nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    thumbnail: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    duration: Mapped[str] = mapped_column(String(50), default="Self-paced", nullable=False)
    total_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    prerequisites: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    learning_objectives: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    # Rating aggregate, always recomputed from the review rows
    rating_average: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    rating_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Publishing and visibility
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completion_certificate: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

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

    # Relationships
    owner = relationship("User", foreign_keys=[instructor_id])
    lessons = relationship(
        "Lesson",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Lesson.order"
    )
    reviews = relationship(
        "Review",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Review.id"
    )
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")
    completions = relationship("CourseCompletion", back_populates="course", cascade="all, delete-orphan")

    # Read-only view over the enrollment rows
    enrolled_students = relationship(
        "User",
        secondary="enrollments",
        viewonly=True,
        order_by="User.id"
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_positive"),
        CheckConstraint("total_hours IS NULL OR total_hours >= 0", name="check_total_hours_positive"),
        CheckConstraint("rating_average >= 0 AND rating_average <= 5", name="check_rating_range"),
        CheckConstraint("rating_count >= 0", name="check_rating_count_positive"),
        Index("idx_course_published_featured", "is_published", "is_featured"),
        Index("idx_course_category_published", "category", "is_published"),
        Index("idx_course_rating", "rating_average"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title='{self.title}')>"

    @property
    def total_enrolled(self) -> int:
        return len(self.enrolled_students)

    @property
    def total_lessons(self) -> int:
        return len(self.lessons)

    def has_student(self, user_id: int) -> bool:
        """Check whether the account is currently enrolled."""
        return any(student.id == user_id for student in self.enrolled_students)

    def recompute_rating(self) -> None:
        """Recompute the rating aggregate from the current review rows."""
        ratings = [review.rating for review in self.reviews]
        self.rating_count = len(ratings)
        self.rating_average = sum(ratings) / len(ratings) if ratings else 0.0

    def to_summary(self) -> Dict[str, Any]:
        """List projection: everything except lessons and reviews."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "instructor": self.instructor,
            "instructorId": self.instructor_id,
            "category": self.category,
            "level": self.level,
            "price": self.price,
            "currency": self.currency,
            "thumbnail": self.thumbnail,
            "tags": self.tags or [],
            "duration": self.duration,
            "totalHours": self.total_hours,
            "rating": {
                "average": self.rating_average,
                "count": self.rating_count
            },
            "prerequisites": self.prerequisites or [],
            "learningObjectives": self.learning_objectives or [],
            "isPublished": self.is_published,
            "isFeatured": self.is_featured,
            "completionCertificate": self.completion_certificate,
            "totalEnrolled": self.total_enrolled,
            "totalLessons": self.total_lessons,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_detail(self) -> Dict[str, Any]:
        """Full projection including lessons, reviews and the owner's profile."""
        data = self.to_summary()
        data.update({
            "lessons": [lesson.to_dict() for lesson in self.lessons],
            "reviews": [review.to_dict() for review in self.reviews],
            "enrolledStudents": [student.id for student in self.enrolled_students],
            "instructorProfile": {
                "id": self.owner.id,
                "name": self.owner.name,
                "bio": self.owner.bio,
                "avatar": self.owner.avatar,
            } if self.owner else None,
        })
        return data


class Lesson(Base):
    """
    Lesson embedded in a course, ordered by `order`.
    """
    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    resources: Mapped[List[dict]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    course = relationship("Course", back_populates="lessons")

    __table_args__ = (
        CheckConstraint("duration IS NULL OR duration >= 1", name="check_lesson_duration"),
        Index("idx_lesson_course_order", "course_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, title='{self.title}', course_id={self.course_id})>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "videoUrl": self.video_url,
            "duration": self.duration,
            "order": self.order,
            "resources": self.resources or [],
        }


class Review(Base):
    """
    A rating left by an enrolled account. At most one per (course, author).
    """
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    course = relationship("Course", back_populates="reviews")
    user = relationship("User", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_review_course_user"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_review_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(course_id={self.course_id}, user_id={self.user_id}, rating={self.rating})>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user": {
                "id": self.user.id,
                "name": self.user.name,
                "avatar": self.user.avatar,
            } if self.user else None,
            "rating": self.rating,
            "comment": self.comment,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
