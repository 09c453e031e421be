"""User profile and directory endpoints."""

from fastapi import APIRouter, Depends

from photo_studio.api.dependencies import get_container, require_admin, require_auth
from photo_studio.api.schemas import ProfileUpdateRequest
from photo_studio.api.serializers import serialize_user
from photo_studio.containers import AppContainer
from photo_studio.domain.models import Role
from photo_studio.domain.sessions import AuthContext

router = APIRouter(prefix="/api/users", tags=["users"])


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update the caller's contact details."""
    user = container.user_service.update_profile(
        caller.user_id, payload.name, payload.phone
    )
    return {"message": "Profile updated", "user": serialize_user(user)}


@router.get("", dependencies=[Depends(require_admin)])
async def list_users(
    role: Role = Role.CLIENT,
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return users with the requested role."""
    return [serialize_user(user) for user in container.user_service.list_users(role)]
