"""Configuration module for the course enrollment service.

This module provides centralized configuration management, including directory
paths, API server settings, authentication settings, and enrollment policy.
All configuration values can be overridden via environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/course_manager.db"
)

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "3000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://127.0.0.1:5500,http://localhost:5500,http://localhost:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

# Credentials live for exactly one hour; not overridable.
ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Roles a user may register with; anything else falls back to DEFAULT_ROLE.
ALLOWED_ROLES: List[str] = ["student", "teacher"]
DEFAULT_ROLE: str = "student"

# --- Enrollment Policy ---

# When true, the teacher creating a course is added to its enrollment set.
AUTO_ENROLL_OWNER: bool = os.getenv("AUTO_ENROLL_OWNER", "true").lower() == "true"


@dataclass(frozen=True)
class AuthSettings:
    """Signing configuration handed to the credential codec."""

    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60


def get_auth_settings() -> AuthSettings:
    """Build the AuthSettings object from environment configuration."""
    return AuthSettings(
        secret_key=JWT_SECRET_KEY,
        algorithm=JWT_ALGORITHM,
        expire_minutes=ACCESS_TOKEN_EXPIRE_MINUTES,
    )
