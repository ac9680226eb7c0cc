"""
Review service for EduHub.

One review per (course, author). Submitting again replaces the earlier
review, and the course's rating aggregate is recomputed from the stored
rows in the same transaction.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduhub.core.exceptions import NotEnrolled, ValidationError
from eduhub.models.course import Course, Review
from eduhub.models.user import User


logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 500


def _validate(rating, comment: Optional[str]) -> Optional[str]:
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    if comment is not None:
        comment = comment.strip()
        if len(comment) > MAX_COMMENT_LENGTH:
            raise ValidationError("Comment cannot exceed 500 characters")
    return comment or None


def _apply(db: Session, course: Course, user: User, rating: int, comment: Optional[str]) -> Review:
    review = (
        db.query(Review)
        .filter(Review.course_id == course.id, Review.user_id == user.id)
        .first()
    )
    if review is not None:
        review.rating = rating
        review.comment = comment
        review.created_at = datetime.now(timezone.utc)
    else:
        review = Review(user_id=user.id, rating=rating, comment=comment)
        course.reviews.append(review)

    db.flush()
    db.expire(course, ["reviews"])
    course.recompute_rating()
    return review


def add_or_replace_review(
    db: Session,
    course: Course,
    user: User,
    rating: int,
    comment: Optional[str] = None
) -> Review:
    """
    Record the user's review of `course`, replacing any earlier one.

    Raises:
        ValidationError: rating outside 1..5 or comment too long
        NotEnrolled: the user is not currently enrolled
    """
    comment = _validate(rating, comment)

    if not course.has_student(user.id):
        raise NotEnrolled("Must be enrolled to review this course")

    try:
        review = _apply(db, course, user, rating, comment)
        db.commit()
    except IntegrityError:
        # Another request inserted this author's review first; overwrite it
        db.rollback()
        review = _apply(db, course, user, rating, comment)
        db.commit()

    db.refresh(course)
    logger.info(
        f"Review by user {user.id} on course {course.id}: "
        f"rating={rating}, average={course.rating_average:.2f} ({course.rating_count})"
    )
    return review
