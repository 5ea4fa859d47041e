"""Course management utilities."""

import logging
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from config import AUTO_ENROLL_OWNER
from core.exceptions import (
    CourseCodeConflictError,
    CourseNotFoundError,
    UserNotFoundError,
)
from models.course import CourseModel
from models.course_enrollment import CourseEnrollmentModel
from models.user import UserModel
from schemas.course import CreateCourseRequest, UpdateCourseRequest
from schemas.user import new_object_id
from utils.course_filter import CourseQueryFilter

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(pytz.utc).isoformat()


class CourseManager:
    """Manages course records using SQLAlchemy."""

    def __init__(self, db: Session, auto_enroll_owner: bool = AUTO_ENROLL_OWNER):
        """Initialize CourseManager.

        Args:
            db: SQLAlchemy Session.
            auto_enroll_owner: Whether a new course starts with its owner enrolled.
        """
        self.db = db
        self.auto_enroll_owner = auto_enroll_owner

    def create_course(self, req: CreateCourseRequest, owner_id: str) -> CourseModel:
        """Create a course owned by a teacher.

        Args:
            req: Course fields.
            owner_id: User ID of the creating teacher.

        Returns:
            The created CourseModel.

        Raises:
            UserNotFoundError: If the owner does not exist.
            CourseCodeConflictError: If the course code is taken.
        """
        # The role gate already ran on the credential; only the FK target is checked.
        owner = self.db.query(UserModel.user_id).filter(UserModel.user_id == owner_id).first()
        if owner is None:
            raise UserNotFoundError(owner_id)

        now = _now()
        course = CourseModel(
            id=new_object_id(),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            **req.model_dump(),
        )
        try:
            self.db.add(course)
            self.db.flush()
            if self.auto_enroll_owner:
                self.db.add(
                    CourseEnrollmentModel(
                        course_id=course.id, user_id=owner_id, enrolled_at=now
                    )
                )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise CourseCodeConflictError() from e
        self.db.refresh(course)
        logger.info("Created course %s (%s) owned by %s", course.id, course.course_id, owner_id)
        return course

    def get_course(self, course_id: str) -> CourseModel:
        model = (
            self.db.query(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .filter(CourseModel.id == course_id)
            .first()
        )
        if not model:
            raise CourseNotFoundError(course_id)
        return model

    def list_courses(self, course_filter: CourseQueryFilter, caller_id: str) -> List[CourseModel]:
        query = self.db.query(CourseModel).options(selectinload(CourseModel.enrollments))
        return course_filter.apply(query, caller_id).all()

    def update_course(self, course: CourseModel, req: UpdateCourseRequest) -> CourseModel:
        """Apply a partial update to a loaded course.

        Only fields present in the request are changed.

        Raises:
            CourseCodeConflictError: If the new course code is taken.
        """
        for field, value in req.model_dump(exclude_unset=True).items():
            setattr(course, field, value)
        course.updated_at = _now()
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise CourseCodeConflictError() from e
        self.db.refresh(course)
        logger.info("Updated course %s", course.id)
        return course

    def delete_course(self, course: CourseModel) -> None:
        """Delete a course together with its enrollment rows."""
        self.db.delete(course)
        self.db.commit()
        logger.info("Deleted course: %s", course.id)


class CourseEnrollmentStore:
    """Atomic set operations on a course's enrollment set.

    Each method is a single conditional write guarded by the
    (course_id, user_id) unique constraint, so concurrent callers cannot
    lose each other's updates.
    """

    def __init__(self, db: Session):
        self.db = db

    def _course_exists(self, course_id: str) -> bool:
        return (
            self.db.query(CourseModel.id).filter(CourseModel.id == course_id).first()
            is not None
        )

    def _is_member(self, course_id: str, user_id: str) -> bool:
        return (
            self.db.query(CourseEnrollmentModel.id)
            .filter(
                CourseEnrollmentModel.course_id == course_id,
                CourseEnrollmentModel.user_id == user_id,
            )
            .first()
            is not None
        )

    def add_to_set_if_absent(self, course_id: str, user_id: str) -> bool:
        """Add a user to the enrollment set.

        Returns:
            True if the user was added, False if already a member.

        Raises:
            CourseNotFoundError: If the course does not exist.
            UserNotFoundError: If the user does not exist.
        """
        if not self._course_exists(course_id):
            raise CourseNotFoundError(course_id)
        try:
            self.db.add(
                CourseEnrollmentModel(course_id=course_id, user_id=user_id, enrolled_at=_now())
            )
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self._is_member(course_id, user_id):
                return False
            # Foreign key violation: the course or the user is gone.
            if not self._course_exists(course_id):
                raise CourseNotFoundError(course_id)
            raise UserNotFoundError(user_id)
        return True

    def remove_from_set_if_present(self, course_id: str, user_id: str) -> bool:
        """Remove a user from the enrollment set.

        Returns:
            True if the user was removed, False if not a member.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        if not self._course_exists(course_id):
            raise CourseNotFoundError(course_id)
        removed = (
            self.db.query(CourseEnrollmentModel)
            .filter(
                CourseEnrollmentModel.course_id == course_id,
                CourseEnrollmentModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed > 0
