"""
Courses router for EduHub.

Handles catalog browsing, course management for instructors and admins,
and the enrollment, completion and review endpoints for students.
"""

from typing import Optional, Dict, Any
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eduhub.core.database import get_db
from eduhub.core.exceptions import NotFoundError
from eduhub.core.permissions import Action, enforce
from eduhub.models.course import Course, CourseCategory, CourseLevel
from eduhub.models.user import User
from eduhub.routers.auth import get_current_user, get_optional_user
from eduhub.schemas.course import CourseCreate, CourseUpdate, ReviewCreate
from eduhub.services import catalog, enrollment, reviews


router = APIRouter()


def _published_or_404(db: Session, course_id: int) -> Course:
    course = catalog.get_course_or_404(db, course_id)
    if not course.is_published:
        raise NotFoundError("Course not found")
    return course


@router.get("")
async def list_courses(
    category: Optional[CourseCategory] = None,
    level: Optional[CourseLevel] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    search: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    List published courses with filtering, sorting and pagination.
    """
    result = catalog.list_courses(
        db,
        category=category.value if category else None,
        level=level.value if level else None,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        page=page,
        limit=limit
    )

    return {
        "success": True,
        "count": result["count"],
        "total": result["total"],
        "pages": result["pages"],
        "currentPage": result["current_page"],
        "courses": [course.to_summary() for course in result["courses"]]
    }


@router.get("/featured")
async def featured_courses(
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get featured courses.
    """
    courses = catalog.get_featured(db)
    return {
        "success": True,
        "count": len(courses),
        "courses": [course.to_summary() for course in courses]
    }


@router.get("/enrolled")
async def enrolled_courses(
    current_user: User = Depends(get_current_user)
) -> Dict[str, Any]:
    """
    Get the caller's enrolled courses.
    """
    courses = enrollment.list_enrolled(current_user)
    return {
        "success": True,
        "count": len(courses),
        "courses": [course.to_summary() for course in courses]
    }


@router.get("/category/{category}")
async def courses_by_category(
    category: str,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get published courses in one category, best rated first.
    """
    courses = catalog.get_by_category(db, category)
    return {
        "success": True,
        "category": category,
        "count": len(courses),
        "courses": [course.to_summary() for course in courses]
    }


@router.get("/{course_id}")
async def get_course(
    course_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get detailed information about a specific course.
    """
    return {
        "success": True,
        "course": catalog.get_course(db, course_id, current_user)
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_course(
    course_data: CourseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Create a new course owned by the caller.
    """
    enforce(Action.CREATE_COURSE, current_user)
    course = catalog.create_course(db, course_data, current_user)

    return {
        "success": True,
        "message": "Course created successfully",
        "course": course.to_detail()
    }


@router.put("/{course_id}")
async def update_course(
    course_id: int,
    course_data: CourseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update a course. Owner instructor or admin only.
    """
    course = catalog.get_course_or_404(db, course_id)
    enforce(Action.UPDATE_COURSE, current_user, course)
    course = catalog.update_course(db, course, course_data)

    return {
        "success": True,
        "message": "Course updated successfully",
        "course": course.to_detail()
    }


@router.delete("/{course_id}")
async def delete_course(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Delete a course. Owner instructor or admin only.
    """
    course = catalog.get_course_or_404(db, course_id)
    enforce(Action.DELETE_COURSE, current_user, course)
    catalog.delete_course(db, course)

    return {
        "success": True,
        "message": "Course deleted successfully"
    }


@router.post("/{course_id}/enroll")
async def enroll(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Enroll the caller in a published course.
    """
    course = _published_or_404(db, course_id)
    enforce(Action.ENROLL, current_user, course)
    enrollment.enroll(db, course, current_user)

    return {
        "success": True,
        "message": "Successfully enrolled in course",
        "course": {
            "id": course.id,
            "title": course.title,
            "instructor": course.instructor
        }
    }


@router.delete("/{course_id}/enroll")
async def unenroll(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Remove the caller's enrollment.
    """
    course = catalog.get_course_or_404(db, course_id)
    enforce(Action.UNENROLL, current_user, course)
    enrollment.unenroll(db, course, current_user)

    return {
        "success": True,
        "message": "Successfully unenrolled from course"
    }


@router.post("/{course_id}/complete")
async def complete_course(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Mark a course the caller is enrolled in as completed.
    """
    course = catalog.get_course_or_404(db, course_id)
    enforce(Action.COMPLETE, current_user, course)
    completion = enrollment.complete(db, course, current_user)

    return {
        "success": True,
        "message": "Course marked as completed",
        "completedAt": completion.completed_at.isoformat()
    }


@router.post("/{course_id}/reviews")
async def add_review(
    course_id: int,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Add or replace the caller's review of a course.
    """
    course = _published_or_404(db, course_id)
    enforce(Action.REVIEW, current_user, course)
    reviews.add_or_replace_review(
        db,
        course,
        current_user,
        review_data.rating,
        review_data.comment
    )

    return {
        "success": True,
        "message": "Review added successfully",
        "rating": {
            "average": course.rating_average,
            "count": course.rating_count
        }
    }


@router.get("/{course_id}/stats")
async def course_stats(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Enrollment, completion, rating and revenue statistics for a course.
    Owner instructor or admin only.
    """
    course = catalog.get_course_or_404(db, course_id)
    enforce(Action.VIEW_STATS, current_user, course)

    return {
        "success": True,
        **catalog.course_stats(db, course)
    }
