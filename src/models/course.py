"""Course database model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(String(24), primary_key=True, index=True)
    course_id = Column(String, unique=True, index=True, nullable=False)
    course_name = Column(String, nullable=False)
    course_description = Column(Text, nullable=True)
    instructor = Column(String, nullable=False)
    day_of_week = Column(String, nullable=True)
    time_of_class = Column(String, nullable=True)
    credit_hours = Column(Integer, nullable=True)
    subject_area = Column(String, nullable=True)
    owner_id = Column(
        String(24), ForeignKey("users.user_id"), index=True, nullable=False
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    enrollments = relationship(
        "CourseEnrollmentModel",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
