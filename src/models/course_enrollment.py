from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class CourseEnrollmentModel(Base):
    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_course_enrollment"),
    )

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        String(24), ForeignKey("courses.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id = Column(
        String(24), ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False
    )
    enrolled_at = Column(String, nullable=False)

    course = relationship("CourseModel", back_populates="enrollments")
