"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import NoReturn

from supabase import Client, create_client

from photo_studio.adapters.cloudinary_client import HttpxCloudinaryClient
from photo_studio.adapters.mock_clients import LoggingMailer, LoggingMediaStore
from photo_studio.adapters.smtp_mailer import SmtpMailer
from photo_studio.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from photo_studio.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from photo_studio.adapters.supabase_invoice_repository import (
    SupabaseInvoiceRepository,
)
from photo_studio.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from photo_studio.adapters.supabase_user_repository import SupabaseUserRepository
from photo_studio.config import Settings, normalize_base_url
from photo_studio.services.auth import AuthService, Mailer
from photo_studio.services.bookings import BookingService
from photo_studio.services.galleries import GalleryService, MediaStore
from photo_studio.services.invoices import InvoiceService
from photo_studio.services.sessions import SessionService
from photo_studio.services.users import UserService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_service: SessionService
    auth_service: AuthService
    booking_service: BookingService
    gallery_service: GalleryService
    invoice_service: InvoiceService
    close_resources: Callable[[], Awaitable[None]]


class UnconfiguredDatastore:
    """Placeholder client whose every query fails with a clear error."""

    def table(self, name: str) -> NoReturn:
        raise RuntimeError(f"Supabase is not configured; cannot query {name!r}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = _create_datastore(resolved_settings)
    user_repository = SupabaseUserRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    frontend_url = normalize_base_url(resolved_settings.frontend_url)

    mailer: Mailer
    if resolved_settings.mail_configured:
        mailer = SmtpMailer(
            host=resolved_settings.smtp_host,
            port=resolved_settings.smtp_port,
            username=resolved_settings.email_user or "",
            password=resolved_settings.email_password or "",
        )
    else:
        logger.warning("Mail credentials missing; emails will be logged only")
        mailer = LoggingMailer()

    media_store: MediaStore
    cloudinary_client: HttpxCloudinaryClient | None = None
    if resolved_settings.media_configured:
        cloudinary_client = HttpxCloudinaryClient.create(
            cloud_name=resolved_settings.cloudinary_cloud_name or "",
            api_key=resolved_settings.cloudinary_api_key or "",
            api_secret=resolved_settings.cloudinary_api_secret or "",
        )
        media_store = cloudinary_client
    else:
        logger.warning("Cloudinary credentials missing; media uploads are mocked")
        media_store = LoggingMediaStore()

    user_service = UserService(
        user_repository, bcrypt_rounds=resolved_settings.bcrypt_rounds
    )
    session_service = SessionService(
        repository=session_repository,
        secret=resolved_settings.jwt_secret,
        ttl=timedelta(hours=resolved_settings.token_ttl_hours),
    )
    auth_service = AuthService(
        users=user_repository,
        sessions=session_service,
        mailer=mailer,
        frontend_url=frontend_url,
        bcrypt_rounds=resolved_settings.bcrypt_rounds,
        allow_legacy_plaintext=resolved_settings.allow_legacy_plaintext_passwords,
    )
    booking_service = BookingService(
        SupabaseBookingRepository(supabase_client),
        enforce_transitions=resolved_settings.enforce_booking_transitions,
    )
    gallery_service = GalleryService(
        repository=SupabaseGalleryRepository(supabase_client),
        media_store=media_store,
        frontend_url=frontend_url,
        media_folder=resolved_settings.media_folder,
    )
    invoice_service = InvoiceService(
        repository=SupabaseInvoiceRepository(supabase_client),
        users=user_repository,
    )

    async def close_resources() -> None:
        if cloudinary_client is not None:
            await cloudinary_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        session_service=session_service,
        auth_service=auth_service,
        booking_service=booking_service,
        gallery_service=gallery_service,
        invoice_service=invoice_service,
        close_resources=close_resources,
    )


def _create_datastore(settings: Settings) -> Client:
    if settings.datastore_configured:
        return create_client(
            settings.supabase_url or "", settings.supabase_service_key or ""
        )
    if not settings.is_hosted:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
    logger.error("Supabase is not configured; datastore requests will fail")
    return UnconfiguredDatastore()  # type: ignore[return-value]
