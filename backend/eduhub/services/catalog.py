"""
Catalog service for EduHub.

Course listing, lookup and the owner-side create/update/delete/stats
operations. Access checks are done by the callers through
`eduhub.core.permissions.enforce`.
"""

import logging
import math
from typing import Optional, Dict, Any, List

from sqlalchemy import or_, func, select
from sqlalchemy.orm import Session, selectinload

from eduhub.core.config import settings
from eduhub.core.exceptions import NotFoundError, ValidationError
from eduhub.models.course import Course, CourseCategory, CourseLevel, Lesson
from eduhub.models.enrollment import CourseCompletion
from eduhub.models.user import User
from eduhub.schemas.course import CourseCreate, CourseUpdate


logger = logging.getLogger(__name__)


SORT_COLUMNS = {
    "created_at": Course.created_at,
    "createdAt": Course.created_at,
    "price": Course.price,
    "rating": Course.rating_average,
    "title": Course.title,
}
DEFAULT_SORT = "-created_at"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _order_by(sort: Optional[str]):
    sort = sort or DEFAULT_SORT
    descending = sort.startswith("-")
    key = sort.lstrip("-")
    if key not in SORT_COLUMNS:
        raise ValidationError(f"Invalid sort field: {key}")

    column = SORT_COLUMNS[key]
    if descending:
        return [column.desc(), Course.id.desc()]
    return [column.asc(), Course.id.asc()]


def _check_choice(value: str, choices, name: str) -> str:
    valid = [choice.value for choice in choices]
    if value not in valid:
        raise ValidationError(f"Invalid {name}. Must be one of: {', '.join(valid)}")
    return value


def _tag_matches(db: Session, pattern: str):
    """EXISTS over the individual elements of the `tags` JSON array."""
    if db.get_bind().dialect.name == "postgresql":
        elements = func.json_array_elements_text(Course.tags).table_valued("value")
    else:
        elements = func.json_each(Course.tags).table_valued("value")

    return (
        select(elements.c.value)
        .where(elements.c.value.ilike(pattern, escape="\\"))
        .correlate(Course)
        .exists()
    )


def _published():
    return Course.is_published.is_(True)


def _with_counts(query):
    return query.options(
        selectinload(Course.enrolled_students),
        selectinload(Course.lessons),
    )


def list_courses(
    db: Session,
    category: Optional[str] = None,
    level: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None
) -> Dict[str, Any]:
    """
    Filtered, sorted, paginated listing of published courses.

    `page` below 1 is treated as 1 and `limit` is clamped to
    [1, MAX_PAGE_SIZE].
    """
    page = max(1, page or 1)
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    limit = min(max(1, limit), settings.MAX_PAGE_SIZE)

    query = db.query(Course).filter(_published())

    if category:
        query = query.filter(Course.category == _check_choice(category, CourseCategory, "category"))
    if level:
        query = query.filter(Course.level == _check_choice(level, CourseLevel, "level"))
    if min_price is not None:
        query = query.filter(Course.price >= min_price)
    if max_price is not None:
        query = query.filter(Course.price <= max_price)
    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        query = query.filter(
            or_(
                Course.title.ilike(pattern, escape="\\"),
                Course.description.ilike(pattern, escape="\\"),
                Course.instructor.ilike(pattern, escape="\\"),
                _tag_matches(db, pattern),
            )
        )

    total = query.order_by(None).count()
    courses = (
        _with_counts(query)
        .order_by(*_order_by(sort))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return {
        "courses": courses,
        "count": len(courses),
        "total": total,
        "pages": math.ceil(total / limit),
        "current_page": page,
    }


def get_featured(db: Session) -> List[Course]:
    """Published featured courses, newest first."""
    return (
        _with_counts(db.query(Course))
        .filter(_published(), Course.is_featured.is_(True))
        .order_by(Course.created_at.desc(), Course.id.desc())
        .limit(settings.FEATURED_LIMIT)
        .all()
    )


def get_by_category(db: Session, category: str) -> List[Course]:
    """
    Published courses in one category, best rated first.

    Raises:
        ValidationError: unknown category
    """
    category = _check_choice(category, CourseCategory, "category")

    return (
        _with_counts(db.query(Course))
        .filter(_published(), Course.category == category)
        .order_by(Course.rating_average.desc(), Course.created_at.desc(), Course.id.desc())
        .all()
    )


def get_course_or_404(db: Session, course_id: int) -> Course:
    """Load any course, published or not."""
    course = db.get(Course, course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


def get_course(db: Session, course_id: int, user: Optional[User] = None) -> Dict[str, Any]:
    """
    Detail projection of a published course with the caller's
    enrollment flag.

    Raises:
        NotFoundError: missing or unpublished
    """
    course = db.get(Course, course_id)
    if course is None or not course.is_published:
        raise NotFoundError("Course not found")

    data = course.to_detail()
    data["isEnrolled"] = course.has_student(user.id) if user is not None else False
    return data


def _build_lessons(lessons: List[Dict[str, Any]]) -> List[Lesson]:
    return [Lesson(**lesson) for lesson in lessons]


def create_course(db: Session, payload: CourseCreate, owner: User) -> Course:
    """Create a course owned by `owner`."""
    data = payload.model_dump(mode="json")
    lessons = data.pop("lessons", [])

    course = Course(**data, instructor_id=owner.id)
    course.lessons = _build_lessons(lessons)
    db.add(course)
    db.commit()
    db.refresh(course)

    logger.info(f"Course created: {course.id} '{course.title}' by user {owner.id}")
    return course


def update_course(db: Session, course: Course, payload: CourseUpdate) -> Course:
    """
    Apply a partial update. Only the fields present in the payload change;
    a `lessons` list replaces the existing lessons.
    """
    data = payload.model_dump(mode="json", exclude_unset=True)
    lessons = data.pop("lessons", None)

    for field, value in data.items():
        setattr(course, field, value)
    if lessons is not None:
        course.lessons = _build_lessons(lessons)

    db.commit()
    db.refresh(course)

    logger.info(f"Course updated: {course.id} (fields: {', '.join(sorted(payload.model_fields_set))})")
    return course


def delete_course(db: Session, course: Course) -> None:
    """Delete a course with its lessons, reviews, enrollments and completions."""
    course_id = course.id
    db.delete(course)
    db.commit()
    logger.info(f"Course deleted: {course_id}")


def course_stats(db: Session, course: Course) -> Dict[str, Any]:
    """Enrollment, completion, rating and revenue figures for one course."""
    total_enrolled = course.total_enrolled
    total_completed = (
        db.query(func.count(CourseCompletion.id))
        .filter(CourseCompletion.course_id == course.id)
        .scalar()
    )
    completion_rate = round(total_completed / total_enrolled * 100, 2) if total_enrolled else 0

    return {
        "courseTitle": course.title,
        "stats": {
            "totalEnrolled": total_enrolled,
            "totalCompleted": total_completed,
            "completionRate": completion_rate,
            "averageRating": course.rating_average,
            "totalReviews": course.rating_count,
            "revenue": course.price * total_enrolled,
            "enrolledStudents": [
                {
                    "id": student.id,
                    "name": student.name,
                    "email": student.email,
                    "createdAt": student.created_at.isoformat() if student.created_at else None,
                }
                for student in course.enrolled_students
            ],
        },
    }
