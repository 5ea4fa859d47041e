"""User schema definitions.

This module defines the User data model and the request/response bodies of
the registration and login endpoints.
"""

import secrets
from datetime import datetime
from typing import Any, Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field


def new_object_id() -> str:
    """Generate a 24-character hex identifier."""
    return secrets.token_hex(12)


class User(BaseModel):
    user_id: str = Field(
        description="The unique identifier for the user.",
        default_factory=new_object_id,
        frozen=True,
    )
    username: str = Field(description="Unique, case-sensitive login name.")
    password_hash: str = Field(description="Bcrypt hash of the password.")
    role: str = Field(description="Either 'student' or 'teacher'.")
    create_at: str = Field(
        description="The time when the user was created.",
        default_factory=lambda: datetime.now(pytz.utc).isoformat(),
    )


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Optional[Any] = Field(
        default=None,
        description="Requested role; anything other than 'teacher' registers a student.",
    )


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User registered successfully"
    user_id: str


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    role: str
    token: str
    subject_id: str = Field(alias="subjectId")


class CurrentUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject_id: str = Field(alias="subjectId")
    username: str
    role: str
    expires_at: datetime = Field(alias="expiresAt")
