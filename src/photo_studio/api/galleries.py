"""Gallery upload, sharing and deletion endpoints."""

from pathlib import PurePath
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from photo_studio.api.dependencies import get_container, require_admin, require_auth
from photo_studio.api.schemas import parse_expiry_hours, parse_recipient_ids
from photo_studio.api.serializers import serialize_gallery
from photo_studio.config import Settings
from photo_studio.containers import AppContainer
from photo_studio.domain.errors import InvalidInputError
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.galleries import IncomingFile

router = APIRouter(prefix="/api/gallery", tags=["gallery"])

ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp"})


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_gallery(  # noqa: PLR0913
    photos: list[UploadFile] | None = File(default=None),
    user_ids: str | None = Form(default=None, alias="userIds"),
    title: str | None = Form(default=None),
    expiry_hours: str | None = Form(default=None, alias="expiryHours"),
    caller: AuthContext = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Upload photos and share them with one or more clients."""
    recipients = parse_recipient_ids(user_ids)
    hours = parse_expiry_hours(expiry_hours)
    files = await _read_uploads(photos or [], container.settings)
    shared = await container.gallery_service.upload_gallery(
        admin_id=caller.user_id,
        user_ids=recipients,
        files=files,
        title=title,
        expiry_hours=hours,
    )
    return {
        "message": "Uploaded",
        "gallery": serialize_gallery(shared.gallery),
        "shareUrl": shared.share_url,
        "publicToken": shared.gallery.public_token,
    }


@router.get("/public/{token}")
async def public_gallery(
    token: str,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a gallery to anyone holding its share token."""
    return serialize_gallery(container.gallery_service.get_public_gallery(token))


@router.get("/{user_id}")
async def list_user_galleries(
    user_id: UUID,
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    galleries = container.gallery_service.list_for_user(caller, user_id)
    return [serialize_gallery(gallery) for gallery in galleries]


@router.delete("/{gallery_id}", dependencies=[Depends(require_admin)])
async def delete_gallery(
    gallery_id: UUID,
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a gallery together with its hosted photos."""
    await container.gallery_service.delete_gallery(gallery_id)
    return {"message": "Deleted"}


async def _read_uploads(
    uploads: list[UploadFile], settings: Settings
) -> list[IncomingFile]:
    if len(uploads) > settings.max_upload_files:
        raise InvalidInputError(f"At most {settings.max_upload_files} photos allowed")
    files: list[IncomingFile] = []
    for upload in uploads:
        filename = upload.filename or ""
        extension = PurePath(filename).suffix.lower().lstrip(".")
        if extension not in ALLOWED_EXTENSIONS:
            raise InvalidInputError("Unsupported file type")
        content = await upload.read(settings.max_upload_bytes + 1)
        if len(content) > settings.max_upload_bytes:
            raise InvalidInputError("File too large")
        files.append(
            IncomingFile(
                filename=filename,
                content_type=upload.content_type or "application/octet-stream",
                content=content,
            )
        )
    return files
