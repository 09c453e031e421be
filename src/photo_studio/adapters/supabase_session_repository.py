"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_studio.adapters.supabase_rows import (
    parse_required_timestamp,
    parse_timestamp,
)
from photo_studio.domain.sessions import SessionRecord
from photo_studio.services.sessions import SessionRepository

_TABLE = "sessions"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for login sessions."""

    client: Client

    def create_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        token: str,
        ip_address: str | None,
        user_agent: str | None,
        expires_at: datetime,
    ) -> SessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "token": token,
                    "ip_address": ip_address,
                    "user_agent": user_agent,
                    "is_active": True,
                    "expires_at": expires_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_session(response.data[0])

    def find_active_session(self, user_id: UUID, token: str) -> SessionRecord | None:
        """Return the active session for the exact user and token, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("token", token)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def touch_session(self, session_id: UUID, at: datetime) -> None:
        """Refresh the last activity timestamp."""
        self.client.table(_TABLE).update({"last_active_at": at.isoformat()}).eq(
            "id", str(session_id)
        ).execute()

    def deactivate_session(self, session_id: UUID) -> None:
        """Mark a session as logged out."""
        self.client.table(_TABLE).update({"is_active": False}).eq(
            "id", str(session_id)
        ).execute()


def _parse_session(row: dict[str, object]) -> SessionRecord:
    created_at = parse_required_timestamp(row.get("created_at"))
    last_active_at = parse_timestamp(row.get("last_active_at")) or created_at
    return SessionRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        token=str(row["token"]),
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        is_active=bool(row.get("is_active")),
        last_active_at=last_active_at,
        created_at=created_at,
        expires_at=parse_required_timestamp(row.get("expires_at")),
    )
