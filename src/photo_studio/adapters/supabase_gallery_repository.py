"""Supabase-backed gallery repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photo_studio.adapters.supabase_rows import (
    format_timestamp,
    parse_optional_uuid,
    parse_required_timestamp,
    parse_timestamp,
)
from photo_studio.domain.galleries import (
    DEFAULT_GALLERY_TITLE,
    GalleryDraft,
    GalleryPhoto,
    GalleryRecord,
)
from photo_studio.services.galleries import GalleryRepository

_TABLE = "galleries"


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for galleries.

    Photos are embedded as a JSON array on the gallery row, so a gallery and
    its photo list are always written together.
    """

    client: Client

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        """Create a gallery row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_ids": [str(user_id) for user_id in draft.user_ids],
                    "admin_id": str(draft.admin_id),
                    "photos": [_dump_photo(photo) for photo in draft.photos],
                    "title": draft.title,
                    "public_token": draft.public_token,
                    "expires_at": format_timestamp(draft.expires_at),
                    "auto_delete_enabled": draft.auto_delete_enabled,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gallery")
        return _parse_gallery(response.data[0])

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""
        return self._first("id", str(gallery_id))

    def get_by_public_token(self, token: str) -> GalleryRecord | None:
        """Return the gallery published under a share token, if present."""
        return self._first("public_token", token)

    def list_for_user(self, user_id: UUID) -> list[GalleryRecord]:
        """Return galleries shared with the user, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .contains("user_ids", [str(user_id)])
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_gallery(row) for row in response.data or []]

    def list_expired(self, now: datetime) -> list[GalleryRecord]:
        """Return auto-deleting galleries whose expiry is before now."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("auto_delete_enabled", True)
            .lt("expires_at", now.isoformat())
            .execute()
        )
        return [_parse_gallery(row) for row in response.data or []]

    def delete_gallery(self, gallery_id: UUID) -> bool:
        """Delete a gallery row; return False when it no longer existed."""
        response = (
            self.client.table(_TABLE).delete().eq("id", str(gallery_id)).execute()
        )
        return bool(response.data)

    def _first(self, column: str, value: str) -> GalleryRecord | None:
        response = (
            self.client.table(_TABLE).select("*").eq(column, value).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_gallery(response.data[0])


def _dump_photo(photo: GalleryPhoto) -> dict[str, object]:
    return {
        "url": photo.url,
        "public_id": photo.public_id,
        "original_name": photo.original_name,
        "mime_type": photo.mime_type,
        "size": photo.size,
        "uploaded_at": photo.uploaded_at.isoformat(),
    }


def _parse_photo(raw: dict[str, object]) -> GalleryPhoto:
    size = raw.get("size")
    return GalleryPhoto(
        url=str(raw.get("url") or ""),
        public_id=raw.get("public_id"),
        original_name=raw.get("original_name"),
        mime_type=raw.get("mime_type"),
        size=int(size) if isinstance(size, int | float) else None,
        uploaded_at=parse_required_timestamp(raw.get("uploaded_at")),
    )


def _parse_gallery(row: dict[str, object]) -> GalleryRecord:
    photos = row.get("photos") or []
    return GalleryRecord(
        id=UUID(str(row["id"])),
        user_ids=[UUID(str(user_id)) for user_id in row.get("user_ids") or []],
        admin_id=parse_optional_uuid(row.get("admin_id")),
        photos=[_parse_photo(photo) for photo in photos if isinstance(photo, dict)],
        title=str(row.get("title") or DEFAULT_GALLERY_TITLE),
        public_token=row.get("public_token"),
        expires_at=parse_timestamp(row.get("expires_at")),
        auto_delete_enabled=bool(row.get("auto_delete_enabled")),
        created_at=parse_required_timestamp(row.get("created_at")),
    )
