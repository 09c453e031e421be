"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from photo_studio.adapters.supabase_rows import (
    UNIQUE_VIOLATION,
    format_timestamp,
    parse_required_timestamp,
    parse_timestamp,
)
from photo_studio.domain.errors import ConflictError
from photo_studio.domain.models import Role, UserRecord
from photo_studio.services.users import UserRepository

_TABLE = "users"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._first("id", str(user_id))

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with the email, if present."""
        return self._first("email", email)

    def get_by_reset_token(self, token: str) -> UserRecord | None:
        """Return the user holding a password reset token, if present."""
        return self._first("reset_token", token)

    def create_user(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: str | None,
        role: Role,
    ) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "name": name,
                        "email": email,
                        "password_hash": password_hash,
                        "phone": phone,
                        "role": str(role),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError("User already exists") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def list_by_role(self, role: Role) -> list[UserRecord]:
        """Return all users with the role, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("role", str(role))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_user(row) for row in response.data or []]

    def update_profile(
        self, user_id: UUID, name: str, phone: str | None
    ) -> UserRecord | None:
        """Set name and phone and mark the profile completed."""
        response = (
            self.client.table(_TABLE)
            .update({"name": name, "phone": phone, "profile_completed": True})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def set_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""
        self.client.table(_TABLE).update({"password_hash": password_hash}).eq(
            "id", str(user_id)
        ).execute()

    def set_reset_token(
        self, user_id: UUID, token: str | None, expires_at: datetime | None
    ) -> None:
        """Store or clear the password reset token."""
        self.client.table(_TABLE).update(
            {"reset_token": token, "reset_expires_at": format_timestamp(expires_at)}
        ).eq("id", str(user_id)).execute()

    def set_otp(
        self, user_id: UUID, otp: str | None, expires_at: datetime | None
    ) -> None:
        """Store or clear the one-time verification code."""
        self.client.table(_TABLE).update(
            {"otp": otp, "otp_expires_at": format_timestamp(expires_at)}
        ).eq("id", str(user_id)).execute()

    def mark_verified(self, user_id: UUID) -> None:
        """Set the verified flag and clear any pending code."""
        self.client.table(_TABLE).update(
            {"verified": True, "otp": None, "otp_expires_at": None}
        ).eq("id", str(user_id)).execute()

    def _first(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table(_TABLE).select("*").eq(column, value).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash") or ""),
        phone=row.get("phone"),
        role=Role(row.get("role") or Role.CLIENT),
        profile_completed=bool(row.get("profile_completed")),
        verified=bool(row.get("verified")),
        created_at=parse_required_timestamp(row.get("created_at")),
        otp=row.get("otp"),
        otp_expires_at=parse_timestamp(row.get("otp_expires_at")),
        reset_token=row.get("reset_token"),
        reset_expires_at=parse_timestamp(row.get("reset_expires_at")),
    )
