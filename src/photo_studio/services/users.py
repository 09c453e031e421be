"""User-related business logic."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from photo_studio.domain.errors import NotFoundError
from photo_studio.domain.models import Role, UserRecord
from photo_studio.services.passwords import hash_password

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""

    def get_by_reset_token(self, token: str) -> UserRecord | None:
        """Return the user holding a password reset token, if present."""

    def create_user(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: str | None,
        role: Role,
    ) -> UserRecord:
        """Create and return a new user record."""

    def list_by_role(self, role: Role) -> list[UserRecord]:
        """Return all users with the role, newest first."""

    def update_profile(
        self, user_id: UUID, name: str, phone: str | None
    ) -> UserRecord | None:
        """Set name and phone and mark the profile completed."""

    def set_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""

    def set_reset_token(
        self, user_id: UUID, token: str | None, expires_at: datetime | None
    ) -> None:
        """Store or clear the password reset token."""

    def set_otp(
        self, user_id: UUID, otp: str | None, expires_at: datetime | None
    ) -> None:
        """Store or clear the one-time verification code."""

    def mark_verified(self, user_id: UUID) -> None:
        """Set the verified flag and clear any pending code."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class UserService:
    """Application service for user profile and directory actions."""

    repository: UserRepository
    bcrypt_rounds: int = 10

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise when it does not exist."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: UUID, name: str, phone: str | None) -> UserRecord:
        """Update contact details and mark the profile as completed."""
        updated = self.repository.update_profile(user_id, name.strip(), phone)
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    def list_users(self, role: Role = Role.CLIENT) -> list[UserRecord]:
        """Return users with the given role."""
        return self.repository.list_by_role(role)

    def ensure_admin(self, email: str, password: str, name: str) -> UserRecord:
        """Create the seed admin account unless the email is already taken."""
        normalized = normalize_email(email)
        existing = self.repository.get_by_email(normalized)
        if existing:
            if not existing.is_admin:
                logger.warning(
                    "Seed admin email belongs to a non-admin account",
                    extra={"user_id": str(existing.id)},
                )
            return existing
        created = self.repository.create_user(
            name=name,
            email=normalized,
            password_hash=hash_password(password, self.bcrypt_rounds),
            phone=None,
            role=Role.ADMIN,
        )
        logger.info("Seeded admin account", extra={"user_id": str(created.id)})
        return created
