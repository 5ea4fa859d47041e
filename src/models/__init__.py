from .base import Base
from .user import UserModel
from .course import CourseModel
from .course_enrollment import CourseEnrollmentModel

__all__ = ["Base", "UserModel", "CourseModel", "CourseEnrollmentModel"]
