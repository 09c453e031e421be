"""Signed tokens and persisted login sessions."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from jose import JWTError, jwt

from photo_studio.domain.errors import ForbiddenError, UnauthorizedError
from photo_studio.domain.models import Role
from photo_studio.domain.sessions import AuthContext, SessionRecord, TokenClaims

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class SessionRepository(Protocol):
    """Persistence interface for login sessions."""

    def create_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        token: str,
        ip_address: str | None,
        user_agent: str | None,
        expires_at: datetime,
    ) -> SessionRecord:
        """Create an active session and return it."""

    def find_active_session(self, user_id: UUID, token: str) -> SessionRecord | None:
        """Return the active session for the exact user and token, if present."""

    def touch_session(self, session_id: UUID, at: datetime) -> None:
        """Refresh the last activity timestamp."""

    def deactivate_session(self, session_id: UUID) -> None:
        """Mark a session as logged out."""


@dataclass
class SessionService:
    """Issues bearer tokens and validates them against stored sessions."""

    repository: SessionRepository
    secret: str
    ttl: timedelta = timedelta(hours=24)
    now: Callable[[], datetime] = field(default=utc_now)

    def issue_token(self, user_id: UUID, role: Role) -> str:
        """Return a signed token encoding the user id and role."""
        issued_at = self.now()
        claims = {
            "id": str(user_id),
            "role": str(role),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(claims, self.secret, algorithm=_ALGORITHM)

    def decode_token(self, token: str) -> TokenClaims:
        """Verify signature and expiry and return the embedded identity."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[_ALGORITHM])
            return TokenClaims(user_id=UUID(payload["id"]), role=Role(payload["role"]))
        except (JWTError, KeyError, ValueError) as exc:
            raise ForbiddenError("Invalid token") from exc

    def open_session(
        self,
        user_id: UUID,
        role: Role,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[str, SessionRecord]:
        """Mint a token and persist the session it belongs to."""
        token = self.issue_token(user_id, role)
        session = self.repository.create_session(
            user_id=user_id,
            token=token,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=self.now() + self.ttl,
        )
        return token, session

    def authenticate(self, token: str | None) -> AuthContext:
        """Validate a bearer token and its session, refreshing activity."""
        if not token:
            raise UnauthorizedError
        claims = self.decode_token(token)
        session = self.repository.find_active_session(claims.user_id, token)
        current = self.now()
        if session is None or current >= session.expires_at:
            raise ForbiddenError("Session expired or invalid")
        self.repository.touch_session(session.id, current)
        return AuthContext(
            user_id=claims.user_id,
            role=claims.role,
            session_id=session.id,
            token=token,
        )

    def end_session(self, session_id: UUID) -> None:
        """Deactivate a session; repeating the call has no further effect."""
        self.repository.deactivate_session(session_id)
        logger.info("Session closed", extra={"session_id": str(session_id)})
