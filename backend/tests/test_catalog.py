"""
Catalog service tests: listing, lookup and owner-side operations.
"""
import pytest

from eduhub.core.exceptions import NotFoundError, ValidationError
from eduhub.models import Course, CourseCompletion, Enrollment, Lesson, Review
from eduhub.schemas.course import CourseCreate, CourseUpdate
from eduhub.services import catalog, enrollment, reviews


# =============================================================================
# Listing
# =============================================================================

class TestListCourses:

    def test_pagination_page_arithmetic(self, db, make_course):
        created = [make_course() for _ in range(12)]
        newest_first = [c.id for c in reversed(created)]

        result = catalog.list_courses(db, page=2, limit=5)

        assert [c.id for c in result["courses"]] == newest_first[5:10]
        assert result["count"] == 5
        assert result["total"] == 12
        assert result["pages"] == 3
        assert result["current_page"] == 2

    def test_last_page_is_partial(self, db, make_course):
        for _ in range(12):
            make_course()

        result = catalog.list_courses(db, page=3, limit=5)

        assert result["count"] == 2

    def test_empty_catalog(self, db):
        result = catalog.list_courses(db)

        assert result["courses"] == []
        assert result["total"] == 0
        assert result["pages"] == 0

    @pytest.mark.parametrize("requested, effective", [(0, 1), (-3, 1), (500, 50), (None, 12)])
    def test_limit_is_clamped(self, db, make_course, requested, effective):
        for _ in range(3):
            make_course()

        result = catalog.list_courses(db, limit=requested)

        assert result["count"] == min(3, effective)
        assert result["pages"] == -(-3 // effective)

    def test_page_below_one_is_first_page(self, db, make_course):
        make_course()

        result = catalog.list_courses(db, page=0)

        assert result["current_page"] == 1
        assert result["count"] == 1

    def test_only_published(self, db, make_course):
        visible = make_course()
        make_course(is_published=False)

        result = catalog.list_courses(db)

        assert [c.id for c in result["courses"]] == [visible.id]
        assert result["total"] == 1

    def test_filters(self, db, make_course):
        cheap = make_course(category="Design", level="Beginner", price=5)
        make_course(category="Design", level="Advanced", price=50)
        make_course(category="Music", level="Beginner", price=5)

        result = catalog.list_courses(db, category="Design", level="Beginner", max_price=10)

        assert [c.id for c in result["courses"]] == [cheap.id]

    def test_price_range(self, db, make_course):
        make_course(price=5)
        mid = make_course(price=25)
        make_course(price=100)

        result = catalog.list_courses(db, min_price=10, max_price=50)

        assert [c.id for c in result["courses"]] == [mid.id]

    def test_search_is_case_insensitive_across_fields(self, db, make_course):
        by_title = make_course(title="Advanced SQL Queries")
        by_tag = make_course(tags=["databases", "postgres"])
        by_instructor = make_course(instructor="Ada Sqlwright")
        make_course(title="Watercolour Basics")

        found = {c.id for c in catalog.list_courses(db, search="sql")["courses"]}
        assert found == {by_title.id, by_instructor.id}

        found = {c.id for c in catalog.list_courses(db, search="POSTGRES")["courses"]}
        assert found == {by_tag.id}

    def test_search_treats_wildcards_literally(self, db, make_course):
        make_course(title="Percentages made easy")
        literal = make_course(title="Scoring 100% on exams")

        result = catalog.list_courses(db, search="%")

        assert [c.id for c in result["courses"]] == [literal.id]

    def test_search_does_not_match_tag_list_syntax(self, db, make_course):
        make_course(title="Watercolour Basics", tags=[])
        make_course(title="Pottery", tags=["clay", "art"])

        assert catalog.list_courses(db, search="[")["courses"] == []
        assert catalog.list_courses(db, search='y", "a')["courses"] == []
        assert catalog.list_courses(db, search="clay, art")["courses"] == []

    def test_search_matches_each_tag(self, db, make_course):
        pottery = make_course(title="Pottery", tags=["clay", "art"])
        make_course(title="Watercolour Basics", tags=[])

        result = catalog.list_courses(db, search="AR")

        assert [c.id for c in result["courses"]] == [pottery.id]

    def test_search_matches_non_ascii_tag(self, db, make_course):
        spanish = make_course(tags=["español", "gramática"])
        make_course(tags=["english"])

        result = catalog.list_courses(db, search="español")

        assert [c.id for c in result["courses"]] == [spanish.id]

    def test_unknown_category_filter(self, db):
        with pytest.raises(ValidationError, match="Invalid category"):
            catalog.list_courses(db, category="Astrology")

    def test_unknown_level_filter(self, db):
        with pytest.raises(ValidationError, match="Invalid level"):
            catalog.list_courses(db, level="Expert")

    def test_sort_by_price_ascending_with_id_tiebreak(self, db, make_course):
        a = make_course(price=20)
        b = make_course(price=10)
        c = make_course(price=20)

        result = catalog.list_courses(db, sort="price")

        assert [x.id for x in result["courses"]] == [b.id, a.id, c.id]

    def test_sort_descending_prefix(self, db, make_course):
        low = make_course(rating_average=1.5)
        high = make_course(rating_average=4.5)

        result = catalog.list_courses(db, sort="-rating")

        assert [x.id for x in result["courses"]] == [high.id, low.id]

    def test_unknown_sort_field(self, db):
        with pytest.raises(ValidationError):
            catalog.list_courses(db, sort="-popularity")


class TestFeaturedAndCategory:

    def test_featured_is_capped_at_six(self, db, make_course):
        featured = [make_course(is_featured=True) for _ in range(8)]
        make_course(is_featured=False)
        make_course(is_featured=True, is_published=False)

        result = catalog.get_featured(db)

        assert [c.id for c in result] == [c.id for c in reversed(featured)][:6]

    def test_by_category_sorted_by_rating(self, db, make_course):
        mid = make_course(category="Science", rating_average=3.0)
        top = make_course(category="Science", rating_average=4.8)
        make_course(category="Music", rating_average=5.0)

        result = catalog.get_by_category(db, "Science")

        assert [c.id for c in result] == [top.id, mid.id]

    def test_unknown_category(self, db):
        with pytest.raises(ValidationError):
            catalog.get_by_category(db, "Astrology")


# =============================================================================
# Lookup
# =============================================================================

class TestGetCourse:

    def test_missing_course(self, db):
        with pytest.raises(NotFoundError):
            catalog.get_course(db, 999)

    def test_unpublished_course_is_hidden(self, db, make_course):
        hidden = make_course(is_published=False)

        with pytest.raises(NotFoundError):
            catalog.get_course(db, hidden.id)

    def test_enrollment_flag(self, db, course, student, make_user):
        enrollment.enroll(db, course, student)

        assert catalog.get_course(db, course.id, student)["isEnrolled"] is True
        assert catalog.get_course(db, course.id, make_user())["isEnrolled"] is False
        assert catalog.get_course(db, course.id)["isEnrolled"] is False

    def test_detail_projection(self, db, make_course, instructor, student):
        owned = make_course(owner=instructor, lessons=2)
        enrollment.enroll(db, owned, student)
        reviews.add_or_replace_review(db, owned, student, 4, "Solid")

        data = catalog.get_course(db, owned.id, student)

        assert [lesson["order"] for lesson in data["lessons"]] == [1, 2]
        assert data["reviews"][0]["user"] == {"id": student.id, "name": student.name, "avatar": None}
        assert data["instructorProfile"]["id"] == instructor.id
        assert data["enrolledStudents"] == [student.id]
        assert data["rating"] == {"average": 4.0, "count": 1}

    def test_unowned_course_has_no_instructor_profile(self, db, make_course):
        unowned = make_course()

        assert catalog.get_course(db, unowned.id)["instructorProfile"] is None


# =============================================================================
# Owner operations
# =============================================================================

class TestCourseManagement:

    def test_create_sets_owner_and_lessons(self, db, instructor, course_payload):
        created = catalog.create_course(db, CourseCreate(**course_payload), instructor)

        assert created.instructor_id == instructor.id
        assert created.tags == ["pytest", "qa"]
        assert [lesson.title for lesson in created.lessons] == ["First", "Second"]
        assert created.lessons[0].resources[0]["type"] == "pdf"
        assert created.is_featured is True

    def test_partial_update(self, db, course):
        original_description = course.description

        catalog.update_course(db, course, CourseUpdate(price=19.99, tags=["New"]))

        assert course.price == 19.99
        assert course.tags == ["new"]
        assert course.description == original_description

    def test_update_replaces_lessons(self, db, make_course, instructor):
        owned = make_course(owner=instructor, lessons=3)

        catalog.update_course(
            db,
            owned,
            CourseUpdate(lessons=[{"title": "Only", "content": "Body", "order": 1}])
        )

        assert [lesson.title for lesson in owned.lessons] == ["Only"]
        assert db.query(Lesson).count() == 1

    def test_delete_cascades(self, db, make_course, instructor, student):
        doomed = make_course(owner=instructor, lessons=2)
        enrollment.enroll(db, doomed, student)
        enrollment.complete(db, doomed, student)
        reviews.add_or_replace_review(db, doomed, student, 5)

        catalog.delete_course(db, doomed)

        assert db.query(Course).count() == 0
        for model in (Lesson, Review, Enrollment, CourseCompletion):
            assert db.query(model).count() == 0
        assert student.enrolled_courses == []
        assert student.completed_courses == []


class TestCourseStats:

    def test_stats(self, db, course, make_user):
        first, second = make_user(), make_user()
        enrollment.enroll(db, course, first)
        enrollment.enroll(db, course, second)
        enrollment.complete(db, course, first)
        reviews.add_or_replace_review(db, course, first, 5)

        result = catalog.course_stats(db, course)
        stats = result["stats"]

        assert result["courseTitle"] == course.title
        assert stats["totalEnrolled"] == 2
        assert stats["totalCompleted"] == 1
        assert stats["completionRate"] == 50.0
        assert stats["averageRating"] == 5.0
        assert stats["totalReviews"] == 1
        assert stats["revenue"] == pytest.approx(course.price * 2)
        assert {s["id"] for s in stats["enrolledStudents"]} == {first.id, second.id}
        assert set(stats["enrolledStudents"][0]) == {"id", "name", "email", "createdAt"}

    def test_stats_without_students(self, db, course):
        stats = catalog.course_stats(db, course)["stats"]

        assert stats["completionRate"] == 0
        assert stats["revenue"] == 0
