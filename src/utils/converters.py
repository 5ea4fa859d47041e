"""Conversions between ORM models and schema objects."""

from models.course import CourseModel
from models.user import UserModel
from schemas.course import CourseInfo
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_id=user.user_id,
        username=user.username,
        password_hash=user.password_hash,
        role=user.role,
        create_at=user.create_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        username=model.username,
        password_hash=model.password_hash,
        role=model.role,
        create_at=model.create_at,
    )


def model_to_course_info(model: CourseModel) -> CourseInfo:
    return CourseInfo(
        id=model.id,
        course_id=model.course_id,
        course_name=model.course_name,
        course_description=model.course_description,
        instructor=model.instructor,
        day_of_week=model.day_of_week,
        time_of_class=model.time_of_class,
        credit_hours=model.credit_hours,
        subject_area=model.subject_area,
        owner=model.owner_id,
        enrolled_users=[e.user_id for e in model.enrollments],
    )
