"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from config import get_auth_settings
from core.credentials import Credential, CredentialCodec
from core.database import get_db
from utils import course_manager
from utils import enrollment_manager
from utils import user_manager

# Singleton for CredentialCodec (signing settings are loaded once)
_credential_codec_instance: CredentialCodec = None

# HTTP Bearer token security; a missing header is reported by the policy check
security = HTTPBearer(auto_error=False)


def get_credential_codec() -> CredentialCodec:
    """Get CredentialCodec singleton instance.

    Returns:
        CredentialCodec instance (singleton).
    """
    global _credential_codec_instance
    if _credential_codec_instance is None:
        _credential_codec_instance = CredentialCodec(get_auth_settings())
    return _credential_codec_instance


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session."""
    return course_manager.CourseManager(db)


def get_enrollment_manager(
    db: Session = Depends(get_db),
) -> enrollment_manager.EnrollmentManager:
    """Get EnrollmentManager backed by the atomic course enrollment store."""
    return enrollment_manager.EnrollmentManager(course_manager.CourseEnrollmentStore(db))


# Type aliases for dependency injection
CredentialCodecDep = Annotated[CredentialCodec, Depends(get_credential_codec)]
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
CourseManagerDep = Annotated[course_manager.CourseManager, Depends(get_course_manager)]
EnrollmentManagerDep = Annotated[
    enrollment_manager.EnrollmentManager, Depends(get_enrollment_manager)
]


def get_optional_credential(
    codec: CredentialCodecDep,
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_auth: Optional[str] = Header(default=None, alias="x-auth"),
) -> Optional[Credential]:
    """Decode the caller credential if one was sent.

    The token is read from "Authorization: Bearer <token>" or, failing that,
    from the "x-auth" header.

    Returns:
        The decoded Credential, or None if no token was supplied.

    Raises:
        InvalidCredentialError: If a token was supplied but does not verify.
    """
    token = bearer.credentials if bearer else x_auth
    if not token:
        return None
    return codec.decode(token)


CredentialDep = Annotated[Optional[Credential], Depends(get_optional_credential)]
