"""FastAPI dependencies for the container and bearer authentication."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from photo_studio.containers import AppContainer
from photo_studio.domain.errors import ForbiddenError
from photo_studio.domain.sessions import AuthContext

_bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def client_details(request: Request) -> tuple[str | None, str | None]:
    """Return the requester IP and user agent recorded on sessions."""
    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> AuthContext:
    """Ensure the request carries a valid token for an active session."""
    token = credentials.credentials if credentials else None
    return container.session_service.authenticate(token)


async def optional_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> AuthContext | None:
    """Authenticate when a token is supplied; anonymous callers get None."""
    if credentials is None or not credentials.credentials:
        return None
    return container.session_service.authenticate(credentials.credentials)


async def require_admin(caller: AuthContext = Depends(require_auth)) -> AuthContext:
    """Ensure the authenticated caller is an administrator."""
    if not caller.is_admin:
        raise ForbiddenError("Admin only")
    return caller
