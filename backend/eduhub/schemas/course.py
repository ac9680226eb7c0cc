"""
Request schemas for the course endpoints.
"""

import re
from typing import ClassVar, Optional, List
from pydantic import Field, field_validator, model_validator

from eduhub.models.course import CourseCategory, CourseLevel, ResourceType
from .base import CamelModel


HTTP_URL = re.compile(r"^https?://.+")


def _check_url(v: Optional[str], message: str) -> Optional[str]:
    if v is None or v == "":
        return None
    if not HTTP_URL.match(v):
        raise ValueError(message)
    return v


def _check_length(v: str, low: int, high: int, message: str) -> str:
    v = v.strip()
    if not low <= len(v) <= high:
        raise ValueError(message)
    return v


class LessonResource(CamelModel):
    title: Optional[str] = None
    url: Optional[str] = None
    type: Optional[ResourceType] = None


class LessonIn(CamelModel):
    title: str
    content: str
    video_url: Optional[str] = None
    duration: Optional[int] = Field(default=None)
    order: int
    resources: List[LessonResource] = []

    @field_validator("title")
    @classmethod
    def title_present(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Lesson title is required")
        return v

    @field_validator("content")
    @classmethod
    def content_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Lesson content is required")
        return v

    @field_validator("video_url")
    @classmethod
    def video_url_format(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v, "Invalid video URL format")

    @field_validator("duration")
    @classmethod
    def duration_minimum(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Duration must be at least 1 minute")
        return v


class CourseFields(CamelModel):
    """Validators shared by create and update."""

    @field_validator("title", check_fields=False)
    @classmethod
    def title_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_length(v, 5, 200, "Title must be between 5 and 200 characters")

    @field_validator("description", check_fields=False)
    @classmethod
    def description_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_length(v, 20, 2000, "Description must be between 20 and 2000 characters")

    @field_validator("instructor", check_fields=False)
    @classmethod
    def instructor_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_length(v, 2, 100, "Instructor name must be between 2 and 100 characters")

    @field_validator("price", check_fields=False)
    @classmethod
    def price_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative")
        return v

    @field_validator("total_hours", check_fields=False)
    @classmethod
    def total_hours_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("Total hours cannot be negative")
        return v

    @field_validator("thumbnail", check_fields=False)
    @classmethod
    def thumbnail_format(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v, "Invalid thumbnail URL format")

    @field_validator("tags", check_fields=False)
    @classmethod
    def normalize_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [tag.strip().lower() for tag in v if tag.strip()]

    @field_validator("prerequisites", "learning_objectives", check_fields=False)
    @classmethod
    def strip_items(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [item.strip() for item in v if item.strip()]


class CourseCreate(CourseFields):
    title: str
    description: str
    instructor: str
    category: CourseCategory
    level: CourseLevel
    price: float = 0.0
    currency: str = "USD"
    thumbnail: Optional[str] = None
    tags: List[str] = []
    duration: str = "Self-paced"
    total_hours: Optional[float] = None
    lessons: List[LessonIn] = []
    prerequisites: List[str] = []
    learning_objectives: List[str] = []
    is_published: bool = True
    is_featured: bool = False
    completion_certificate: bool = False


class CourseUpdate(CourseFields):
    title: Optional[str] = None
    description: Optional[str] = None
    instructor: Optional[str] = None
    category: Optional[CourseCategory] = None
    level: Optional[CourseLevel] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    thumbnail: Optional[str] = None
    tags: Optional[List[str]] = None
    duration: Optional[str] = None
    total_hours: Optional[float] = None
    lessons: Optional[List[LessonIn]] = None
    prerequisites: Optional[List[str]] = None
    learning_objectives: Optional[List[str]] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None
    completion_certificate: Optional[bool] = None

    # Columns that may be omitted but never cleared
    NON_NULLABLE: ClassVar[tuple] = (
        "title", "description", "instructor", "category", "level", "price",
        "currency", "tags", "duration", "lessons", "prerequisites",
        "learning_objectives", "is_published", "is_featured", "completion_certificate",
    )

    @model_validator(mode="after")
    def reject_nulls(self) -> "CourseUpdate":
        for field in self.NON_NULLABLE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ReviewCreate(CamelModel):
    rating: int = Field(..., strict=True)
    comment: Optional[str] = None

    @field_validator("rating")
    @classmethod
    def rating_range(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError("Rating must be between 1 and 5")
        return v

    @field_validator("comment")
    @classmethod
    def comment_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > 500:
            raise ValueError("Comment cannot exceed 500 characters")
        return v or None
