"""Error taxonomy shared by services and the HTTP layer.

Each error carries the short, client-safe message and the HTTP status it maps
to. Services raise these; the API layer renders them as ``{"message": ...}``.
"""


class StudioError(Exception):
    """Base class for expected, client-facing failures."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(StudioError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Invalid input"


class InvalidCredentialsError(StudioError):
    """Unknown email or wrong password, deliberately indistinguishable."""

    status_code = 400
    default_message = "Invalid credentials"


class ConflictError(StudioError):
    """A unique value is already taken."""

    status_code = 400
    default_message = "User already exists"


class InvalidOrExpiredError(StudioError):
    """A one-time token or code did not match or is past its expiry."""

    status_code = 400
    default_message = "Invalid or expired token"


class InvalidTransitionError(StudioError):
    """A status change outside the allowed state graph."""

    status_code = 400
    default_message = "Invalid status transition"


class UnauthorizedError(StudioError):
    """No credentials were supplied."""

    status_code = 401
    default_message = "Access denied. No token provided."


class ForbiddenError(StudioError):
    """Credentials are invalid or lack the required role."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(StudioError):
    status_code = 404
    default_message = "Not found"


class GoneError(StudioError):
    """A public resource existed but has expired."""

    status_code = 410
    default_message = "Expired"


class MediaStoreError(StudioError):
    """The external media host rejected an upload or deletion."""

    status_code = 502
    default_message = "Media store request failed"
