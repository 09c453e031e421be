"""Domain models for login sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from photo_studio.domain.models import Role


@dataclass(frozen=True)
class SessionRecord:
    """Represents one persisted login."""

    id: UUID
    user_id: UUID
    token: str
    ip_address: str | None
    user_agent: str | None
    is_active: bool
    last_active_at: datetime
    created_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    """Identity decoded from a signed bearer token."""

    user_id: UUID
    role: Role


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller of a guarded operation."""

    user_id: UUID
    role: Role
    session_id: UUID
    token: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
