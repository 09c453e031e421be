"""Gallery uploads, public sharing and expiry cleanup."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from photo_studio.domain.errors import (
    ForbiddenError,
    GoneError,
    InvalidInputError,
    MediaStoreError,
    NotFoundError,
)
from photo_studio.domain.galleries import (
    DEFAULT_GALLERY_TITLE,
    GalleryDraft,
    GalleryPhoto,
    GalleryRecord,
)
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.sessions import utc_now

logger = logging.getLogger(__name__)

_TOKEN_ATTEMPTS = 5


@dataclass(frozen=True)
class IncomingFile:
    """A file received from the client, fully read into memory."""

    filename: str
    content_type: str
    content: bytes


@dataclass(frozen=True)
class StoredMedia:
    """Where the media store put an uploaded file."""

    url: str
    public_id: str
    size: int | None = None


class MediaStore(Protocol):
    """Interface for the external media host."""

    async def upload(self, file: IncomingFile, folder: str) -> StoredMedia:
        """Upload a file and return its durable URL and deletion handle."""

    async def delete(self, public_id: str) -> bool:
        """Delete a file; return False when it was already gone."""


class GalleryRepository(Protocol):
    """Persistence interface for galleries."""

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        """Create a gallery and return it."""

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        """Return a gallery by id, if present."""

    def get_by_public_token(self, token: str) -> GalleryRecord | None:
        """Return the gallery published under a share token, if present."""

    def list_for_user(self, user_id: UUID) -> list[GalleryRecord]:
        """Return galleries shared with the user, newest first."""

    def list_expired(self, now: datetime) -> list[GalleryRecord]:
        """Return auto-deleting galleries whose expiry is before now."""

    def delete_gallery(self, gallery_id: UUID) -> bool:
        """Delete a gallery; return False when it no longer existed."""


@dataclass(frozen=True)
class SharedGallery:
    """A freshly uploaded gallery with its share link."""

    gallery: GalleryRecord
    share_url: str


@dataclass
class GalleryService:
    """Application service for the gallery lifecycle."""

    repository: GalleryRepository
    media_store: MediaStore
    frontend_url: str
    media_folder: str = "studio-prince-gallery"
    now: Callable[[], datetime] = field(default=utc_now)

    async def upload_gallery(  # noqa: PLR0913
        self,
        admin_id: UUID,
        user_ids: list[UUID],
        files: list[IncomingFile],
        title: str | None = None,
        expiry_hours: int | None = None,
    ) -> SharedGallery:
        """Upload files to the media store and publish them as a gallery."""
        if not user_ids or not files:
            raise InvalidInputError("Missing data")
        expires_at = self._expiry(expiry_hours)
        public_token = self._new_public_token()

        # Nothing references the photos until the gallery row exists.
        photos = await self._upload_photos(files)
        try:
            gallery = self.repository.create_gallery(
                GalleryDraft(
                    user_ids=list(dict.fromkeys(user_ids)),
                    admin_id=admin_id,
                    photos=photos,
                    title=(title or "").strip() or DEFAULT_GALLERY_TITLE,
                    public_token=public_token,
                    expires_at=expires_at,
                    auto_delete_enabled=expires_at is not None,
                )
            )
        except Exception:
            logger.exception("Failed to save gallery", extra={"photos": len(photos)})
            await self._delete_photos(photos)
            raise
        logger.info(
            "Gallery uploaded",
            extra={"gallery_id": str(gallery.id), "photos": len(photos)},
        )
        return SharedGallery(gallery=gallery, share_url=self.share_url(gallery))

    def share_url(self, gallery: GalleryRecord) -> str:
        return f"{self.frontend_url}/gallery/shared/{gallery.public_token}"

    def list_for_user(self, caller: AuthContext, user_id: UUID) -> list[GalleryRecord]:
        """Return galleries shared with a user, visible to them or an admin."""
        if caller.user_id != user_id and not caller.is_admin:
            raise ForbiddenError("Denied")
        return self.repository.list_for_user(user_id)

    def get_public_gallery(self, token: str) -> GalleryRecord:
        """Resolve a share token; possession of the token grants read access."""
        gallery = self.repository.get_by_public_token(token)
        if gallery is None:
            raise NotFoundError
        if gallery.is_expired(self.now()):
            raise GoneError
        return gallery

    async def delete_gallery(self, gallery_id: UUID) -> None:
        """Delete a gallery and its hosted photos."""
        gallery = self.repository.get_gallery(gallery_id)
        if gallery is None:
            raise NotFoundError
        failed = await self._delete_photos(gallery.photos)
        if failed:
            raise MediaStoreError("Failed to delete some photos")
        self.repository.delete_gallery(gallery.id)
        logger.info("Gallery deleted", extra={"gallery_id": str(gallery.id)})

    async def cleanup_expired(self) -> int:
        """Purge expired galleries and their media; return how many were removed."""
        cleaned = 0
        for gallery in self.repository.list_expired(self.now()):
            failed = await self._delete_photos(gallery.photos)
            if failed:
                logger.warning(
                    "Keeping expired gallery until its photos are deleted",
                    extra={"gallery_id": str(gallery.id), "failed": len(failed)},
                )
                continue
            if self.repository.delete_gallery(gallery.id):
                cleaned += 1
        logger.info("Expired gallery cleanup finished", extra={"cleaned": cleaned})
        return cleaned

    def _expiry(self, expiry_hours: int | None) -> datetime | None:
        if expiry_hours is None or expiry_hours <= 0:
            return None
        try:
            return self.now() + timedelta(hours=expiry_hours)
        except OverflowError as exc:
            raise InvalidInputError("Invalid expiryHours") from exc

    async def _upload_photos(self, files: list[IncomingFile]) -> list[GalleryPhoto]:
        """Upload every file; on failure remove the ones already uploaded."""
        photos: list[GalleryPhoto] = []
        try:
            for upload in files:
                stored = await self.media_store.upload(upload, self.media_folder)
                size = stored.size if stored.size is not None else len(upload.content)
                photos.append(
                    GalleryPhoto(
                        url=stored.url,
                        public_id=stored.public_id,
                        original_name=upload.filename,
                        mime_type=upload.content_type,
                        size=size,
                        uploaded_at=self.now(),
                    )
                )
        except Exception as exc:
            logger.exception(
                "Gallery upload failed", extra={"uploaded_before_failure": len(photos)}
            )
            await self._delete_photos(photos)
            raise MediaStoreError("Upload failed") from exc
        return photos

    async def _delete_photos(self, photos: list[GalleryPhoto]) -> list[str]:
        """Delete every photo, continuing past failures; return failed handles."""
        failed: list[str] = []
        for photo in photos:
            if not photo.public_id:
                continue
            try:
                await self.media_store.delete(photo.public_id)
            except Exception:
                logger.exception(
                    "Failed to delete media", extra={"public_id": photo.public_id}
                )
                failed.append(photo.public_id)
        return failed

    def _new_public_token(self) -> str:
        for _ in range(_TOKEN_ATTEMPTS):
            token = secrets.token_hex(16)
            if self.repository.get_by_public_token(token) is None:
                return token
        raise RuntimeError("Could not allocate a unique gallery token")
