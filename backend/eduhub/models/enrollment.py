"""
Enrollment models for EduHub.

Enrollment and CourseCompletion are the single stored form of the
account <-> course relations; both sides read them through view-only
relationships.
"""

from datetime import datetime
from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from eduhub.core.database import Base


class Enrollment(Base):
    """
    An account currently taking a course.
    """
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    user = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),
        Index("idx_enrollment_course", "course_id"),
    )

    def __repr__(self) -> str:
        return f"<Enrollment(user_id={self.user_id}, course_id={self.course_id})>"


class CourseCompletion(Base):
    """
    A course an account has marked as completed.

    Completions are permanent: unenrolling afterwards does not remove them.
    """
    __tablename__ = "course_completions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    user = relationship("User", back_populates="completions")
    course = relationship("Course", back_populates="completions")

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_completion_user_course"),
        Index("idx_completion_course", "course_id"),
    )

    def __repr__(self) -> str:
        return f"<CourseCompletion(user_id={self.user_id}, course_id={self.course_id})>"
