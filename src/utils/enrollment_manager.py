"""Enrollment state transitions.

Each (course, user) pair is either NOT_ENROLLED or ENROLLED. Enrolling an
enrolled user and dropping a non-member are both rejected without touching
stored state.
"""

import logging
from enum import Enum
from typing import Protocol

from core.exceptions import AlreadyEnrolledError, NotEnrolledError

logger = logging.getLogger(__name__)


class EnrollmentState(str, Enum):
    NOT_ENROLLED = "not_enrolled"
    ENROLLED = "enrolled"


class EnrollmentStore(Protocol):
    """Atomic membership primitives offered by course persistence."""

    def add_to_set_if_absent(self, course_id: str, user_id: str) -> bool:
        ...

    def remove_from_set_if_present(self, course_id: str, user_id: str) -> bool:
        ...


class EnrollmentManager:
    """Enrolls users in courses and drops them again."""

    def __init__(self, store: EnrollmentStore):
        """Initialize EnrollmentManager.

        Args:
            store: Persistence exposing the two atomic set primitives.
        """
        self.store = store

    def enroll(self, course_id: str, user_id: str) -> EnrollmentState:
        """Move a user from NOT_ENROLLED to ENROLLED.

        Args:
            course_id: Course ID.
            user_id: User ID to enroll.

        Returns:
            EnrollmentState.ENROLLED.

        Raises:
            CourseNotFoundError: If the course does not exist.
            AlreadyEnrolledError: If the user is already enrolled.
        """
        if not self.store.add_to_set_if_absent(course_id, user_id):
            raise AlreadyEnrolledError()
        logger.info("User %s enrolled in course %s", user_id, course_id)
        return EnrollmentState.ENROLLED

    def drop(self, course_id: str, user_id: str) -> EnrollmentState:
        """Move a user from ENROLLED to NOT_ENROLLED.

        Args:
            course_id: Course ID.
            user_id: User ID to drop.

        Returns:
            EnrollmentState.NOT_ENROLLED.

        Raises:
            CourseNotFoundError: If the course does not exist.
            NotEnrolledError: If the user is not enrolled.
        """
        if not self.store.remove_from_set_if_present(course_id, user_id):
            raise NotEnrolledError()
        logger.info("User %s dropped course %s", user_id, course_id)
        return EnrollmentState.NOT_ENROLLED
