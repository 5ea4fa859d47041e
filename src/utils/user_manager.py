"""User management utilities.

This module provides user management functionality including user storage,
password hashing, and user authentication.
"""

import logging
from typing import Any, Optional

import bcrypt
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from config import ALLOWED_ROLES, BCRYPT_ROUNDS, DEFAULT_ROLE
from core.exceptions import UnauthenticatedError, UserAlreadyExistsError
from schemas.user import User
from models.user import UserModel
from utils.converters import user_to_model, model_to_user

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def normalize_role(role: Any) -> str:
    """Return the role to register with.

    Anything other than one of the allowed role strings (missing, unknown,
    wrong case, or not a string at all) becomes the default role.
    """
    if role in ALLOWED_ROLES:
        return role
    return DEFAULT_ROLE


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        logger.warning(
            "Password exceeds %d bytes (%d bytes), truncating",
            BCRYPT_MAX_BYTES,
            len(password_bytes),
        )
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(_password_bytes(password), salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(
                _password_bytes(plain_password), hashed_password.encode("utf-8")
            )
        except ValueError as e:
            # Stored value is not a bcrypt hash
            logger.error("Password verification error: %s", e)
            return False

    def create_user(self, username: str, password: str, role: Any) -> User:
        """Create a new user.

        Args:
            username: Username for the new user.
            password: Plain text password.
            role: Requested role; normalized with normalize_role().

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If username already exists.
        """
        existing = self.db.query(UserModel).filter(UserModel.username == username).first()
        if existing:
            raise UserAlreadyExistsError()

        user = User(
            username=username,
            password_hash=self.hash_password(password),
            role=normalize_role(role),
        )

        # Two concurrent registrations can both pass the check above; the
        # unique constraint on username decides.
        try:
            self.db.add(user_to_model(user))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError() from e

        logger.info("Created user: %s (%s)", username, user.role)
        return user

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username.

        Args:
            username: Username to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.username == username).first()
        if model:
            return model_to_user(model)
        return None

    def authenticate(self, username: str, password: str) -> User:
        """Check a username/password pair.

        Raises:
            UnauthenticatedError: If the user is unknown or the password is wrong.
        """
        user = self.get_user_by_username(username)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("Failed login for username: %s", username)
            raise UnauthenticatedError("Invalid username or password")
        return user
