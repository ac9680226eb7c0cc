"""
Enrollment service for EduHub.

Enrollment and completion rows are the only stored form of the
account <-> course relations, so each operation touches a single table
and commits once.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduhub.core.exceptions import AlreadyEnrolled, NotEnrolled, AlreadyCompleted
from eduhub.models.course import Course
from eduhub.models.enrollment import Enrollment, CourseCompletion
from eduhub.models.user import User


logger = logging.getLogger(__name__)


def enroll(db: Session, course: Course, user: User) -> Enrollment:
    """
    Enroll `user` in `course`.

    Raises:
        AlreadyEnrolled: the user already holds an enrollment
    """
    if course.has_student(user.id):
        raise AlreadyEnrolled()

    enrollment = Enrollment(user_id=user.id, course_id=course.id)
    db.add(enrollment)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request won the unique (user, course) slot
        db.rollback()
        raise AlreadyEnrolled()
    db.refresh(enrollment)

    logger.info(f"User {user.id} enrolled in course {course.id}")
    return enrollment


def unenroll(db: Session, course: Course, user: User) -> None:
    """
    Remove the user's enrollment. Completion records are kept.

    Raises:
        NotEnrolled: the user holds no enrollment
    """
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.user_id == user.id, Enrollment.course_id == course.id)
        .first()
    )
    if enrollment is None:
        raise NotEnrolled()

    db.delete(enrollment)
    db.commit()
    logger.info(f"User {user.id} unenrolled from course {course.id}")


def complete(db: Session, course: Course, user: User) -> CourseCompletion:
    """
    Mark a course the user is enrolled in as completed.

    Raises:
        NotEnrolled: the user is not currently enrolled
        AlreadyCompleted: a completion is already recorded
    """
    if not course.has_student(user.id):
        raise NotEnrolled("Must be enrolled to complete this course")
    if user.has_completed(course.id):
        raise AlreadyCompleted()

    completion = CourseCompletion(user_id=user.id, course_id=course.id)
    db.add(completion)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyCompleted()
    db.refresh(completion)

    logger.info(f"User {user.id} completed course {course.id}")
    return completion


def list_enrolled(user: User) -> List[Course]:
    """Courses the user is currently enrolled in, in id order."""
    return list(user.enrolled_courses)
