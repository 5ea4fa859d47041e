"""Filters for listing courses.

Three filters narrow the visible course set:
- enrolled only: courses the caller is enrolled in
- owner: courses owned by a given user (ignored when enrolled only is set)
- search: case-insensitive substring of the course code or course name
  (Unicode case folding, so "éclair" finds "Éclair")

Search is applied on top of whichever of the first two is active.
"""

import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Query

from core.exceptions import ValidationError
from models.course import CourseModel
from models.course_enrollment import CourseEnrollmentModel

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

LIKE_ESCAPE = "\\"


def is_object_id(value: Optional[str]) -> bool:
    """Return True if value is a 24-character hex identifier."""
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None


def _escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _fold_function(query: Query):
    # SQLite connections carry a casefold() registered by create_db_engine.
    if query.session.get_bind().dialect.name == "sqlite":
        return func.casefold
    return func.lower


@dataclass(frozen=True)
class CourseQueryFilter:
    enrolled_only: bool = False
    owner: Optional[str] = None
    search: Optional[str] = None

    def __post_init__(self):
        # The owner id is validated before any query runs.
        if self.owner and not self.enrolled_only:
            if not is_object_id(self.owner):
                raise ValidationError("Invalid owner ID")
            object.__setattr__(self, "owner", self.owner.lower())

    @classmethod
    def from_query_params(
        cls,
        enrolled: Optional[str] = None,
        owner: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "CourseQueryFilter":
        """Build a filter from raw query string values.

        Args:
            enrolled: Only the literal "true" turns the enrolled filter on.
            owner: Owner user ID; empty means no owner filter.
            search: Search text; empty means no search.

        Raises:
            ValidationError: If owner is given but is not a 24-hex ID.
        """
        enrolled_only = enrolled == "true"
        return cls(
            enrolled_only=enrolled_only,
            owner=None if enrolled_only else (owner or None),
            search=search or None,
        )

    def apply(self, query: Query, caller_id: str) -> Query:
        """Add the filter predicates to a query over CourseModel."""
        if self.enrolled_only:
            query = query.filter(
                CourseModel.enrollments.any(CourseEnrollmentModel.user_id == caller_id)
            )
        elif self.owner:
            query = query.filter(CourseModel.owner_id == self.owner)

        if self.search:
            fold = _fold_function(query)
            pattern = f"%{_escape_like(self.search.casefold())}%"
            query = query.filter(
                or_(
                    fold(CourseModel.course_id).like(pattern, escape=LIKE_ESCAPE),
                    fold(CourseModel.course_name).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query
