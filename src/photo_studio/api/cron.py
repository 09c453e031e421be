"""Scheduled maintenance endpoints."""

import hmac

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from photo_studio.api.dependencies import get_container
from photo_studio.containers import AppContainer
from photo_studio.domain.errors import UnauthorizedError

router = APIRouter(prefix="/api/cron", tags=["cron"])

_cron_bearer = HTTPBearer(auto_error=False)


async def require_cron_secret(
    credentials: HTTPAuthorizationCredentials | None = Depends(_cron_bearer),
    container: AppContainer = Depends(get_container),
) -> None:
    """Ensure scheduler calls carry the shared secret when one is configured."""
    secret = container.settings.cron_secret
    if not secret:
        return
    supplied = credentials.credentials if credentials else ""
    if not hmac.compare_digest(supplied.encode(), secret.encode()):
        raise UnauthorizedError("Unauthorized")


@router.get("/cleanup", dependencies=[Depends(require_cron_secret)])
async def cleanup_expired_galleries(
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Remove expired galleries and their hosted photos."""
    cleaned = await container.gallery_service.cleanup_expired()
    return {"message": f"Cleaned {cleaned} galleries"}
