"""Tests for the course list filters."""

import pytest

from core.exceptions import ValidationError
from models.course import CourseModel
from utils.course_filter import CourseQueryFilter, is_object_id

OWNER_ID = "0123456789abcdef01234567"


class TestFromQueryParams:
    def test_no_params_means_no_filter(self):
        course_filter = CourseQueryFilter.from_query_params()

        assert course_filter == CourseQueryFilter()

    @pytest.mark.parametrize("enrolled", ["false", "True", "1", ""])
    def test_only_literal_true_enables_enrolled(self, enrolled):
        assert not CourseQueryFilter.from_query_params(enrolled=enrolled).enrolled_only

    def test_owner_ignored_when_enrolled(self):
        course_filter = CourseQueryFilter.from_query_params(enrolled="true", owner="undefined")

        assert course_filter.enrolled_only
        assert course_filter.owner is None

    @pytest.mark.parametrize(
        "owner", ["not-a-hex-id", "undefined", "0123456789abcdef0123456", "g" * 24]
    )
    def test_invalid_owner_rejected(self, owner):
        with pytest.raises(ValidationError):
            CourseQueryFilter.from_query_params(owner=owner)

    def test_owner_is_lowercased(self):
        course_filter = CourseQueryFilter.from_query_params(owner=OWNER_ID.upper())

        assert course_filter.owner == OWNER_ID

    def test_empty_search_ignored(self):
        assert CourseQueryFilter.from_query_params(search="").search is None


def test_is_object_id():
    assert is_object_id(OWNER_ID)
    assert not is_object_id(None)
    assert not is_object_id(OWNER_ID + "0")


class TestApply:
    @pytest.fixture
    def courses(self, make_user, make_course):
        teacher = make_user("teacher1", "teacher")
        other_teacher = make_user("teacher2", "teacher")
        student = make_user("student1")
        make_course(teacher, code="CS101", name="Intro to Programming")
        make_course(teacher, code="MATH200", name="Linear Algebra")
        make_course(other_teacher, code="CS300", name="Compilers")
        return {"teacher": teacher, "other": other_teacher, "student": student}

    def _codes(self, db, course_filter, caller_id):
        query = course_filter.apply(db.query(CourseModel), caller_id)
        return sorted(course.course_id for course in query.all())

    def test_owner_filter(self, db, courses):
        course_filter = CourseQueryFilter(owner=courses["other"])

        assert self._codes(db, course_filter, courses["student"]) == ["CS300"]

    def test_enrolled_filter_uses_caller(self, db, courses):
        course_filter = CourseQueryFilter(enrolled_only=True)

        assert self._codes(db, course_filter, courses["teacher"]) == ["CS101", "MATH200"]
        assert self._codes(db, course_filter, courses["student"]) == []

    def test_search_is_case_insensitive_on_code_or_name(self, db, courses):
        assert self._codes(db, CourseQueryFilter(search="cs"), courses["student"]) == [
            "CS101",
            "CS300",
        ]
        assert self._codes(db, CourseQueryFilter(search="ALGEBRA"), courses["student"]) == [
            "MATH200"
        ]

    def test_search_on_top_of_owner(self, db, courses):
        course_filter = CourseQueryFilter(owner=courses["teacher"], search="cs")

        assert self._codes(db, course_filter, courses["student"]) == ["CS101"]

    def test_search_wildcards_are_literal(self, db, courses):
        assert self._codes(db, CourseQueryFilter(search="%"), courses["student"]) == []
        assert self._codes(db, CourseQueryFilter(search="_"), courses["student"]) == []

    def test_search_folds_non_ascii_letters(self, db, courses, make_course):
        make_course(courses["teacher"], code="FR110", name="Éclair et Pâtisserie")

        for search in ("éclair", "ÉCLAIR", "PÂTISSERIE"):
            assert self._codes(db, CourseQueryFilter(search=search), courses["student"]) == [
                "FR110"
            ]
