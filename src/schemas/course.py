"""Course schema definitions.

Course bodies use the camelCase field names of the public API; attributes
are snake_case on the Python side.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CourseFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_description: Optional[str] = Field(default=None, alias="courseDescription")
    day_of_week: Optional[str] = Field(default=None, alias="dayOfWeek")
    time_of_class: Optional[str] = Field(default=None, alias="timeOfClass")
    credit_hours: Optional[int] = Field(default=None, ge=0, alias="creditHours")
    subject_area: Optional[str] = Field(default=None, alias="subjectArea")


class CreateCourseRequest(CourseFields):
    course_id: str = Field(min_length=1, alias="courseId")
    course_name: str = Field(min_length=1, alias="courseName")
    instructor: str = Field(min_length=1)


class UpdateCourseRequest(CourseFields):
    """Partial update. Owner, members and id are not editable."""

    course_id: Optional[str] = Field(default=None, min_length=1, alias="courseId")
    course_name: Optional[str] = Field(default=None, min_length=1, alias="courseName")
    instructor: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in ("course_id", "course_name", "instructor"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{type(self).model_fields[name].alias or name} cannot be null")
        return self


class CourseInfo(CourseFields):
    id: str
    course_id: str = Field(alias="courseId")
    course_name: str = Field(alias="courseName")
    instructor: str
    owner: str
    enrolled_users: List[str] = Field(default_factory=list, alias="enrolledUsers")


class MessageResponse(BaseModel):
    message: str
