"""Authentication routes.

This module handles HTTP endpoints for user registration and login.
"""

import logging

from fastapi import APIRouter, status

from core.authorization import Operation, authorize
from core.dependencies import CredentialCodecDep, CredentialDep, UserManagerDep
from schemas.user import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/users",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
def register(req: RegisterRequest, user_manager: UserManagerDep) -> RegisterResponse:
    """Register a new user.

    The role defaults to "student" when it is missing or not one of
    "student" and "teacher".

    Args:
        req: Registration request with username, password and role.
        user_manager: Injected UserManager instance.

    Returns:
        RegisterResponse with the new user_id.

    Raises:
        UserAlreadyExistsError: If the username is taken.
    """
    authorize(Operation.REGISTER_USER, None)
    user = user_manager.create_user(
        username=req.username,
        password=req.password,
        role=req.role,
    )
    return RegisterResponse(user_id=user.user_id)


@router.post(
    "/auth",
    response_model=LoginResponse,
    response_model_by_alias=True,
    summary="Log in",
)
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    codec: CredentialCodecDep,
) -> LoginResponse:
    """Login with username and password.

    Args:
        req: Login request with username and password.
        user_manager: Injected UserManager instance.
        codec: Injected CredentialCodec.

    Returns:
        LoginResponse with username, role, token and subject ID.

    Raises:
        UnauthenticatedError: If the username or password is wrong.
    """
    authorize(Operation.LOGIN, None)
    user = user_manager.authenticate(req.username, req.password)
    token = codec.issue(user.user_id, user.username, user.role)
    return LoginResponse(
        username=user.username,
        role=user.role,
        token=token,
        subject_id=user.user_id,
    )


@router.get("/auth/me", response_model=CurrentUserResponse, summary="Current identity")
def get_current_user_info(credential: CredentialDep) -> CurrentUserResponse:
    """Return the identity carried by the caller's credential."""
    authorize(Operation.CURRENT_USER, credential)
    return CurrentUserResponse(
        subject_id=credential.subject_id,
        username=credential.username,
        role=credential.role,
        expires_at=credential.expires_at,
    )
