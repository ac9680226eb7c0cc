"""
Access policy tests. Entities are built in memory; no database needed.
"""
import pytest

from eduhub.core.exceptions import Forbidden
from eduhub.core.permissions import Action, POLICIES, authorize, check_ownership, enforce
from eduhub.models import Course, User, UserRole


def _user(user_id, role):
    return User(id=user_id, name=f"{role} {user_id}", email=f"{role}{user_id}@eduhub.io", role=role)


@pytest.fixture
def owner():
    return _user(1, UserRole.INSTRUCTOR.value)


@pytest.fixture
def other_instructor():
    return _user(2, UserRole.INSTRUCTOR.value)


@pytest.fixture
def admin_user():
    return _user(3, UserRole.ADMIN.value)


@pytest.fixture
def student_user():
    return _user(4, UserRole.STUDENT.value)


@pytest.fixture
def owned_course(owner):
    return Course(id=10, title="Owned", instructor_id=owner.id)


@pytest.fixture
def orphan_course():
    return Course(id=11, title="Orphan", instructor_id=None)


def test_every_action_has_a_policy():
    assert set(POLICIES) == set(Action)


class TestAuthorize:

    def test_allowed_role(self, owner):
        authorize(owner, [UserRole.INSTRUCTOR.value, UserRole.ADMIN.value])

    def test_rejected_role_message(self, student_user):
        with pytest.raises(Forbidden) as exc_info:
            authorize(student_user, [UserRole.ADMIN.value])

        assert exc_info.value.message == "User role student is not authorized to access this resource"
        assert exc_info.value.status_code == 403


class TestOwnership:

    def test_owner_passes(self, owned_course, owner):
        check_ownership(owned_course, owner)

    def test_admin_passes(self, owned_course, admin_user):
        check_ownership(owned_course, admin_user)

    def test_other_instructor_is_denied(self, owned_course, other_instructor):
        with pytest.raises(Forbidden):
            check_ownership(owned_course, other_instructor)

    def test_unowned_course_is_admin_only(self, orphan_course, owner, admin_user):
        with pytest.raises(Forbidden):
            check_ownership(orphan_course, owner)
        check_ownership(orphan_course, admin_user)


class TestEnforce:

    @pytest.mark.parametrize("action, message", [
        (Action.UPDATE_COURSE, "Not authorized to update this course"),
        (Action.DELETE_COURSE, "Not authorized to delete this course"),
        (Action.VIEW_STATS, "Not authorized to view course statistics"),
    ])
    def test_non_owner_instructor_is_denied(self, owned_course, other_instructor, action, message):
        with pytest.raises(Forbidden) as exc_info:
            enforce(action, other_instructor, owned_course)

        assert exc_info.value.message == message

    @pytest.mark.parametrize("action", [Action.UPDATE_COURSE, Action.DELETE_COURSE, Action.VIEW_STATS])
    def test_owner_and_admin_are_allowed(self, owned_course, owner, admin_user, action):
        enforce(action, owner, owned_course)
        enforce(action, admin_user, owned_course)

    def test_student_cannot_create(self, student_user):
        with pytest.raises(Forbidden):
            enforce(Action.CREATE_COURSE, student_user)

    def test_staff_can_create(self, owner, admin_user):
        enforce(Action.CREATE_COURSE, owner)
        enforce(Action.CREATE_COURSE, admin_user)

    @pytest.mark.parametrize("action", [Action.ENROLL, Action.UNENROLL, Action.COMPLETE, Action.REVIEW])
    def test_learning_actions_open_to_every_role(self, owned_course, student_user, owner, admin_user, action):
        for user in (student_user, owner, admin_user):
            enforce(action, user, owned_course)

    def test_ownership_policy_needs_a_course(self, owner):
        with pytest.raises(ValueError):
            enforce(Action.UPDATE_COURSE, owner)
