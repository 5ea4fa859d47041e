"""Signed identity credentials.

Credentials are stateless JWTs carrying the caller's user id, username and
role. They are valid for a fixed window after issuance; the role embedded at
login is trusted for that whole window and never re-checked against the user
table.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict

from config import AuthSettings
from core.exceptions import InvalidCredentialError

logger = logging.getLogger(__name__)


class Credential(BaseModel):
    """Decoded caller identity."""

    model_config = ConfigDict(frozen=True)

    subject_id: str
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime


class CredentialCodec:
    """Issues and verifies signed credentials.

    The codec holds the signing settings it was built with; nothing is read
    from process globals after construction.
    """

    def __init__(self, settings: AuthSettings):
        """Initialize CredentialCodec.

        Args:
            settings: Secret, algorithm and lifetime used for signing.
        """
        self._secret_key = settings.secret_key
        self._algorithm = settings.algorithm
        self._lifetime = timedelta(minutes=settings.expire_minutes)

    def issue(
        self,
        subject_id: str,
        username: str,
        role: str,
        now: Optional[datetime] = None,
    ) -> str:
        """Create a signed token for a user.

        Args:
            subject_id: The user's ID.
            username: The user's name.
            role: The user's role at the time of login.
            now: Issuance time. Defaults to the current UTC time.

        Returns:
            Encoded JWT token string.
        """
        issued_at = (now or datetime.now(pytz.utc)).replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        claims = {
            "sub": subject_id,
            "username": username,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str, now: Optional[datetime] = None) -> Credential:
        """Verify a token and return the credential it carries.

        Args:
            token: Encoded JWT token string.
            now: Verification time. Defaults to the current UTC time.

        Returns:
            The decoded Credential.

        Raises:
            InvalidCredentialError: If the signature does not verify, the
                token is malformed, or the token has expired.
        """
        if not token:
            raise InvalidCredentialError()
        try:
            # Expiry is checked below so that "at expiry" is already invalid.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.info("Rejected credential: %s", exc.__class__.__name__)
            raise InvalidCredentialError() from exc

        try:
            credential = Credential(
                subject_id=payload["sub"],
                username=payload["username"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], pytz.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], pytz.utc),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            logger.info("Rejected credential: malformed claims")
            raise InvalidCredentialError() from exc

        current = now or datetime.now(pytz.utc)
        if current >= credential.expires_at:
            logger.info("Rejected credential: expired for subject %s", credential.subject_id)
            raise InvalidCredentialError("Credential has expired")
        return credential
