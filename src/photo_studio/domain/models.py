"""Domain models for studio users."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Roles recognised by the authorization checks."""

    CLIENT = "client"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    phone: str | None
    role: Role
    profile_completed: bool
    verified: bool
    created_at: datetime
    otp: str | None = None
    otp_expires_at: datetime | None = None
    reset_token: str | None = None
    reset_expires_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
