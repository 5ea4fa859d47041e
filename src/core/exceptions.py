"""Custom exception classes for the course enrollment service.

This module defines application-specific exceptions following Google Python
Style Guide. Every exception carries the HTTP status it is reported with and a
message that is safe to show to the caller.
"""

from fastapi import status


class CourseServiceError(Exception):
    """Base exception for all course service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        """Initialize the exception.

        Args:
            message: Caller-visible message. Defaults to the class message.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CourseServiceError):
    """Raised when request data or an identifier is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthenticatedError(CourseServiceError):
    """Raised when the caller identity is missing or cannot be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication credentials"


class InvalidCredentialError(UnauthenticatedError):
    """Raised when a token is malformed, tampered with, or expired."""

    pass


class ForbiddenError(CourseServiceError):
    """Raised when a role or ownership gate rejects the caller."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to perform this operation"


class NotFoundError(CourseServiceError):
    """Raised when a referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class CourseNotFoundError(NotFoundError):
    """Raised when a requested course cannot be found."""

    def __init__(self, course_id: str):
        """Initialize the exception.

        Args:
            course_id: The ID of the course that was not found.
        """
        self.course_id = course_id
        super().__init__("Course not found")


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")


class ConflictError(CourseServiceError):
    """Raised when a unique key is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UserAlreadyExistsError(ConflictError):
    """Raised when registering a username that is already taken."""

    default_message = "Username already exists"


class CourseCodeConflictError(ConflictError):
    """Raised when a course code is already used by another course."""

    default_message = "Course code already exists"


class AlreadyEnrolledError(CourseServiceError):
    """Raised when enrolling a user who is already enrolled."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already enrolled in this course"


class NotEnrolledError(CourseServiceError):
    """Raised when dropping a course the user is not enrolled in."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User not enrolled in this course"
