"""Registration, login and account recovery flows."""

import hmac
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from photo_studio.domain.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidOrExpiredError,
    NotFoundError,
)
from photo_studio.domain.models import Role, UserRecord
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.passwords import (
    hash_password,
    matches_legacy_plaintext,
    verify_password,
)
from photo_studio.services.sessions import SessionService, utc_now
from photo_studio.services.users import UserRepository, normalize_email

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)
OTP_TTL = timedelta(minutes=10)


class Mailer(Protocol):
    """Interface for outgoing email."""

    async def send(self, to: str, subject: str, text: str) -> bool:
        """Deliver a message; return False when it was only logged."""


@dataclass
class AuthService:
    """Application service for identity and credential lifecycle."""

    users: UserRepository
    sessions: SessionService
    mailer: Mailer
    frontend_url: str
    bcrypt_rounds: int = 10
    allow_legacy_plaintext: bool = True
    now: Callable[[], datetime] = field(default=utc_now)

    def register(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password: str,
        phone: str | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[str, UserRecord]:
        """Create a client account and open its first session."""
        normalized = normalize_email(email)
        if self.users.get_by_email(normalized):
            raise ConflictError("User already exists")
        user = self.users.create_user(
            name=name.strip(),
            email=normalized,
            password_hash=hash_password(password, self.bcrypt_rounds),
            phone=phone,
            role=Role.CLIENT,
        )
        token, _ = self.sessions.open_session(
            user.id, user.role, ip_address=ip_address, user_agent=user_agent
        )
        logger.info("Registered user", extra={"user_id": str(user.id)})
        return token, user

    def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[str, UserRecord]:
        """Check credentials and open a new session."""
        user = self.users.get_by_email(normalize_email(email))
        if user is None:
            raise InvalidCredentialsError
        if not verify_password(password, user.password_hash):
            if not (
                self.allow_legacy_plaintext
                and matches_legacy_plaintext(password, user.password_hash)
            ):
                raise InvalidCredentialsError
            self.users.set_password(
                user.id, hash_password(password, self.bcrypt_rounds)
            )
            logger.warning(
                "Upgraded legacy plaintext password",
                extra={"user_id": str(user.id)},
            )
        token, _ = self.sessions.open_session(
            user.id, user.role, ip_address=ip_address, user_agent=user_agent
        )
        return token, user

    def logout(self, caller: AuthContext) -> None:
        self.sessions.end_session(caller.session_id)

    async def forgot_password(self, email: str) -> bool:
        """Store a reset token and mail the link; return whether it was sent."""
        user = self.users.get_by_email(normalize_email(email))
        if user is None:
            raise NotFoundError("User not found")
        token = secrets.token_hex(20)
        self.users.set_reset_token(user.id, token, self.now() + RESET_TOKEN_TTL)
        reset_url = f"{self.frontend_url}/reset-password?token={token}"
        return await self._dispatch(
            to=user.email,
            subject="Password Reset Request",
            text=f"Reset your password here: {reset_url}",
            diagnostic=f"Reset Link: {reset_url}",
        )

    def reset_password(self, token: str, new_password: str) -> None:
        """Replace the password of the user holding a live reset token."""
        user = self.users.get_by_reset_token(token) if token else None
        if (
            user is None
            or user.reset_expires_at is None
            or user.reset_expires_at <= self.now()
        ):
            raise InvalidOrExpiredError("Invalid or expired token")
        self.users.set_password(
            user.id, hash_password(new_password, self.bcrypt_rounds)
        )
        self.users.set_reset_token(user.id, None, None)

    async def send_otp(self, user_id: UUID) -> bool:
        """Store a fresh six-digit code and mail it; return whether it was sent."""
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        otp = str(100000 + secrets.randbelow(900000))
        self.users.set_otp(user.id, otp, self.now() + OTP_TTL)
        return await self._dispatch(
            to=user.email,
            subject="Verify Email",
            text=f"Your OTP is: {otp}",
            diagnostic=f"OTP: {otp}",
        )

    def verify_otp(self, user_id: UUID, otp: str) -> UserRecord:
        """Mark the user verified when the code matches and is still live."""
        user = self.users.get_by_id(user_id)
        if (
            user is None
            or not user.otp
            or user.otp_expires_at is None
            or self.now() > user.otp_expires_at
            or not hmac.compare_digest(user.otp.encode(), otp.strip().encode())
        ):
            raise InvalidOrExpiredError("Invalid or expired OTP")
        self.users.mark_verified(user.id)
        refreshed = self.users.get_by_id(user.id)
        if refreshed is None:
            raise NotFoundError("User not found")
        return refreshed

    async def _dispatch(
        self, to: str, subject: str, text: str, diagnostic: str
    ) -> bool:
        try:
            return await self.mailer.send(to=to, subject=subject, text=text)
        except Exception:
            logger.exception("Failed to send email", extra={"subject": subject})
            logger.warning("Undelivered mail for %s: %s", to, diagnostic)
            return False
