"""Role and ownership gates for course operations.

Permission requirements per operation:
- Listing, reading, enrolling and dropping: any authenticated user
- Creating a course: teachers only (the caller becomes the owner)
- Updating or deleting a course: teachers who own the course
- Registering and logging in: no credential required
- Reading one's own identity: any authenticated user
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from core.credentials import Credential
from core.exceptions import ForbiddenError, UnauthenticatedError

TEACHER = "teacher"
STUDENT = "student"


class Operation(str, Enum):
    LIST_COURSES = "list_courses"
    REGISTER_USER = "register_user"
    LOGIN = "login"
    CREATE_COURSE = "create_course"
    READ_COURSE = "read_course"
    UPDATE_COURSE = "update_course"
    DELETE_COURSE = "delete_course"
    ENROLL_COURSE = "enroll_course"
    DROP_COURSE = "drop_course"
    CURRENT_USER = "current_user"


@dataclass(frozen=True)
class Policy:
    requires_identity: bool
    role: Optional[str] = None
    requires_ownership: bool = False


POLICY: Dict[Operation, Policy] = {
    Operation.LIST_COURSES: Policy(requires_identity=True),
    Operation.REGISTER_USER: Policy(requires_identity=False),
    Operation.LOGIN: Policy(requires_identity=False),
    Operation.CREATE_COURSE: Policy(requires_identity=True, role=TEACHER),
    Operation.READ_COURSE: Policy(requires_identity=True),
    Operation.UPDATE_COURSE: Policy(
        requires_identity=True, role=TEACHER, requires_ownership=True
    ),
    Operation.DELETE_COURSE: Policy(
        requires_identity=True, role=TEACHER, requires_ownership=True
    ),
    Operation.ENROLL_COURSE: Policy(requires_identity=True),
    Operation.DROP_COURSE: Policy(requires_identity=True),
    Operation.CURRENT_USER: Policy(requires_identity=True),
}


def require_role(credential: Credential, role: str) -> None:
    """Pass iff the credential carries the given role.

    Raises:
        ForbiddenError: If the role does not match.
    """
    if credential.role != role:
        raise ForbiddenError(f"Only {role}s can perform this operation")


def require_ownership(credential: Credential, resource_owner_id: str) -> None:
    """Pass iff the caller is the resource owner.

    Raises:
        ForbiddenError: If the caller does not own the resource.
    """
    if credential.subject_id != resource_owner_id:
        raise ForbiddenError("Not authorized to modify this course")


def authorize(operation: Operation, credential: Optional[Credential]) -> None:
    """Apply the identity and role gates of the policy table.

    Args:
        operation: The operation being attempted.
        credential: Decoded caller credential, or None if absent.

    Raises:
        UnauthenticatedError: If the operation needs an identity and none is given.
        ForbiddenError: If the role gate fails.
    """
    policy = POLICY[operation]
    if not policy.requires_identity:
        return
    if credential is None:
        raise UnauthenticatedError()
    if policy.role is not None:
        require_role(credential, policy.role)


def authorize_resource(
    operation: Operation, credential: Credential, resource_owner_id: str
) -> None:
    """Apply the ownership gate once the target resource is loaded.

    Call after authorize(); a no-op for operations without an ownership gate.

    Raises:
        ForbiddenError: If the caller does not own the resource.
    """
    if POLICY[operation].requires_ownership:
        require_ownership(credential, resource_owner_id)
