"""Domain models for shared photo galleries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

DEFAULT_GALLERY_TITLE = "My Gallery"


@dataclass(frozen=True)
class GalleryPhoto:
    """A photo hosted by the media store."""

    url: str
    public_id: str | None
    original_name: str | None
    mime_type: str | None
    size: int | None
    uploaded_at: datetime


@dataclass(frozen=True)
class GalleryDraft:
    """Gallery fields ready to be persisted."""

    user_ids: list[UUID]
    admin_id: UUID
    photos: list[GalleryPhoto]
    title: str
    public_token: str
    expires_at: datetime | None
    auto_delete_enabled: bool


@dataclass(frozen=True)
class GalleryRecord:
    """Represents a persisted gallery."""

    id: UUID
    user_ids: list[UUID]
    admin_id: UUID | None
    photos: list[GalleryPhoto]
    title: str
    public_token: str | None
    expires_at: datetime | None
    auto_delete_enabled: bool
    created_at: datetime

    def is_expired(self, at: datetime) -> bool:
        """Return True once an auto-deleting gallery reached its expiry."""
        if not self.auto_delete_enabled or self.expires_at is None:
            return False
        return at >= self.expires_at
