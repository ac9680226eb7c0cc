"""
Access policy for EduHub.

All role and ownership rules live in POLICIES and are evaluated by
`enforce` before any business logic runs.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Dict

from eduhub.core.exceptions import Forbidden
from eduhub.models.user import User, UserRole
from eduhub.models.course import Course


logger = logging.getLogger(__name__)


ALL_ROLES = frozenset(role.value for role in UserRole)
STAFF_ROLES = frozenset({UserRole.INSTRUCTOR.value, UserRole.ADMIN.value})


class Action(str, Enum):
    """Guarded operations on courses."""
    CREATE_COURSE = "course.create"
    UPDATE_COURSE = "course.update"
    DELETE_COURSE = "course.delete"
    VIEW_STATS = "course.stats"
    ENROLL = "course.enroll"
    UNENROLL = "course.unenroll"
    COMPLETE = "course.complete"
    REVIEW = "course.review"


@dataclass(frozen=True)
class Policy:
    roles: frozenset
    requires_ownership: bool = False
    denied_message: str = "Not authorized to perform this action"


POLICIES: Dict[Action, Policy] = {
    Action.CREATE_COURSE: Policy(STAFF_ROLES),
    Action.UPDATE_COURSE: Policy(STAFF_ROLES, True, "Not authorized to update this course"),
    Action.DELETE_COURSE: Policy(STAFF_ROLES, True, "Not authorized to delete this course"),
    Action.VIEW_STATS: Policy(STAFF_ROLES, True, "Not authorized to view course statistics"),
    Action.ENROLL: Policy(ALL_ROLES),
    Action.UNENROLL: Policy(ALL_ROLES),
    Action.COMPLETE: Policy(ALL_ROLES),
    Action.REVIEW: Policy(ALL_ROLES),
}


def authorize(user: User, roles: Iterable[str]) -> None:
    """
    Check that the user's role is one of `roles`.

    Raises:
        Forbidden: if the role is not allowed
    """
    if user.role not in set(roles):
        raise Forbidden(f"User role {user.role} is not authorized to access this resource")


def check_ownership(course: Course, user: User, message: str = "Not authorized to modify this course") -> None:
    """
    Admins may act on any course; everyone else only on courses they own.

    Raises:
        Forbidden: if the user is neither admin nor the recorded owner
    """
    if user.is_admin:
        return
    if course.instructor_id is None or course.instructor_id != user.id:
        raise Forbidden(message)


def enforce(action: Action, user: User, course: Optional[Course] = None) -> None:
    """
    Evaluate the policy for `action` against the caller and, when the
    policy requires it, the target course.
    """
    policy = POLICIES[action]
    try:
        authorize(user, policy.roles)
        if policy.requires_ownership:
            if course is None:
                raise ValueError(f"{action.value} requires a course to check ownership against")
            check_ownership(course, user, policy.denied_message)
    except Forbidden:
        logger.warning(
            f"Denied {action.value} for user {user.id} ({user.role})"
            + (f" on course {course.id}" if course is not None else "")
        )
        raise
