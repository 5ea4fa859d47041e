"""Course management routes."""

from typing import List, Optional

from fastapi import APIRouter, status

from core.authorization import Operation, authorize, authorize_resource
from core.dependencies import CourseManagerDep, CredentialDep, EnrollmentManagerDep
from schemas.course import (
    CourseInfo,
    CreateCourseRequest,
    MessageResponse,
    UpdateCourseRequest,
)
from utils.converters import model_to_course_info
from utils.course_filter import CourseQueryFilter

router = APIRouter(prefix="/api/courses", tags=["Course"])


@router.get("", response_model=List[CourseInfo], summary="List courses")
def list_courses(
    course_manager: CourseManagerDep,
    credential: CredentialDep,
    enrolled: Optional[str] = None,
    owner: Optional[str] = None,
    search: Optional[str] = None,
) -> List[CourseInfo]:
    """List courses visible to the caller.

    Args:
        course_manager: Injected CourseManager instance.
        credential: Caller credential.
        enrolled: "true" to list only courses the caller is enrolled in.
        owner: 24-hex user ID; list only courses owned by that user.
        search: Case-insensitive text matched against course code or name.

    Returns:
        Matching courses, in no particular order.

    Raises:
        ValidationError: If owner is not a valid ID.
    """
    authorize(Operation.LIST_COURSES, credential)
    course_filter = CourseQueryFilter.from_query_params(enrolled, owner, search)
    models = course_manager.list_courses(course_filter, credential.subject_id)
    return [model_to_course_info(model) for model in models]


@router.post(
    "",
    response_model=CourseInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create course",
)
def create_course(
    req: CreateCourseRequest,
    course_manager: CourseManagerDep,
    credential: CredentialDep,
) -> CourseInfo:
    authorize(Operation.CREATE_COURSE, credential)
    model = course_manager.create_course(req, credential.subject_id)
    return model_to_course_info(model)


@router.get("/{course_id}", response_model=CourseInfo, summary="Get course")
def get_course(
    course_id: str,
    course_manager: CourseManagerDep,
    credential: CredentialDep,
) -> CourseInfo:
    authorize(Operation.READ_COURSE, credential)
    return model_to_course_info(course_manager.get_course(course_id))


@router.put("/{course_id}", response_model=CourseInfo, summary="Update course")
def update_course(
    course_id: str,
    req: UpdateCourseRequest,
    course_manager: CourseManagerDep,
    credential: CredentialDep,
) -> CourseInfo:
    """Update a course.

    Permission requirements:
    - Teacher: Can only update courses they own
    - Student: No permission

    Raises:
        ForbiddenError: If the caller is not a teacher or not the owner.
        CourseNotFoundError: If the course does not exist.
    """
    authorize(Operation.UPDATE_COURSE, credential)
    course = course_manager.get_course(course_id)
    authorize_resource(Operation.UPDATE_COURSE, credential, course.owner_id)
    return model_to_course_info(course_manager.update_course(course, req))


@router.delete("/{course_id}", response_model=MessageResponse, summary="Delete course")
def delete_course(
    course_id: str,
    course_manager: CourseManagerDep,
    credential: CredentialDep,
) -> MessageResponse:
    """Delete a course.

    Permission requirements:
    - Teacher: Can only delete courses they own
    - Student: No permission
    """
    authorize(Operation.DELETE_COURSE, credential)
    course = course_manager.get_course(course_id)
    authorize_resource(Operation.DELETE_COURSE, credential, course.owner_id)
    course_manager.delete_course(course)
    return MessageResponse(message="Course deleted")


@router.post("/{course_id}/enroll", response_model=MessageResponse, summary="Enroll in course")
def enroll(
    course_id: str,
    enrollment_manager: EnrollmentManagerDep,
    credential: CredentialDep,
) -> MessageResponse:
    authorize(Operation.ENROLL_COURSE, credential)
    enrollment_manager.enroll(course_id, credential.subject_id)
    return MessageResponse(message="Successfully enrolled in course")


@router.post("/{course_id}/drop", response_model=MessageResponse, summary="Drop course")
def drop(
    course_id: str,
    enrollment_manager: EnrollmentManagerDep,
    credential: CredentialDep,
) -> MessageResponse:
    authorize(Operation.DROP_COURSE, credential)
    enrollment_manager.drop(course_id, credential.subject_id)
    return MessageResponse(message="Successfully dropped the course")
