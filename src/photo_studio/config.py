"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

HOSTED_ENVIRONMENTS = frozenset({"production"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    jwt_secret: str = "development-secret"
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10
    frontend_url: str = "http://localhost:5173"
    cors_allow_origins: str = "*"
    email_user: str | None = None
    email_password: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    media_folder: str = "studio-prince-gallery"
    max_upload_files: int = 20
    max_upload_bytes: int = 50 * 1024 * 1024
    cron_secret: str | None = None
    admin_email: str | None = None
    admin_password: str | None = None
    admin_name: str = "Studio Admin"
    allow_legacy_plaintext_passwords: bool = True
    enforce_booking_transitions: bool = True
    legacy_booking_query_access: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def mail_configured(self) -> bool:
        """Return True when SMTP credentials are present."""
        return bool(self.email_user and self.email_password)

    @property
    def media_configured(self) -> bool:
        """Return True when Cloudinary credentials are present."""
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def datastore_configured(self) -> bool:
        """Return True when the Supabase connection is configured."""
        return bool(self.supabase_url and self.supabase_service_key)

    @property
    def is_hosted(self) -> bool:
        """Return True when running in a hosted deployment."""
        return self.environment in HOSTED_ENVIRONMENTS


def normalize_base_url(raw: str) -> str:
    """Strip trailing slashes so paths can be appended safely."""
    return raw.strip().rstrip("/")


def parse_origins(raw: str) -> list[str]:
    """Parse a comma-separated CORS origin list."""
    origins = [chunk.strip() for chunk in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]
