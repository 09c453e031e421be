"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from photo_studio.config import Settings
from photo_studio.containers import AppContainer
from photo_studio.domain.bookings import BookingDraft, BookingRecord, BookingStatus
from photo_studio.domain.galleries import GalleryDraft, GalleryRecord
from photo_studio.domain.invoices import InvoiceDraft, InvoiceRecord, InvoiceStatus
from photo_studio.domain.models import Role, UserRecord
from photo_studio.domain.sessions import SessionRecord
from photo_studio.services.auth import AuthService, Mailer
from photo_studio.services.bookings import BookingRepository, BookingService
from photo_studio.services.galleries import (
    GalleryRepository,
    GalleryService,
    IncomingFile,
    MediaStore,
    StoredMedia,
)
from photo_studio.services.invoices import InvoiceRepository, InvoiceService
from photo_studio.services.sessions import SessionRepository, SessionService
from photo_studio.services.users import UserRepository, UserService


@dataclass
class FakeClock:
    """Adjustable clock injected as the ``now`` callable of services."""

    current: datetime = field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0)
    )

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    clock: FakeClock = field(default_factory=FakeClock)
    users: dict[UUID, UserRecord] = field(default_factory=dict)
    mutations: int = 0

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_reset_token(self, token: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.reset_token == token), None)

    def create_user(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: str | None,
        role: Role,
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            name=name,
            email=email,
            password_hash=password_hash,
            phone=phone,
            role=role,
            profile_completed=False,
            verified=False,
            created_at=self.clock(),
        )
        self._store(user)
        return user

    def list_by_role(self, role: Role) -> list[UserRecord]:
        return [user for user in self.users.values() if user.role == role]

    def update_profile(
        self, user_id: UUID, name: str, phone: str | None
    ) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = replace(user, name=name, phone=phone, profile_completed=True)
        self._store(updated)
        return updated

    def set_password(self, user_id: UUID, password_hash: str) -> None:
        self._store(replace(self.users[user_id], password_hash=password_hash))

    def set_reset_token(
        self, user_id: UUID, token: str | None, expires_at: datetime | None
    ) -> None:
        self._store(
            replace(self.users[user_id], reset_token=token, reset_expires_at=expires_at)
        )

    def set_otp(
        self, user_id: UUID, otp: str | None, expires_at: datetime | None
    ) -> None:
        self._store(replace(self.users[user_id], otp=otp, otp_expires_at=expires_at))

    def mark_verified(self, user_id: UUID) -> None:
        self._store(
            replace(self.users[user_id], verified=True, otp=None, otp_expires_at=None)
        )

    def _store(self, user: UserRecord) -> None:
        self.users[user.id] = user
        self.mutations += 1


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    clock: FakeClock = field(default_factory=FakeClock)
    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)

    def create_session(  # noqa: PLR0913
        self,
        user_id: UUID,
        token: str,
        ip_address: str | None,
        user_agent: str | None,
        expires_at: datetime,
    ) -> SessionRecord:
        now = self.clock()
        session = SessionRecord(
            id=uuid4(),
            user_id=user_id,
            token=token,
            ip_address=ip_address,
            user_agent=user_agent,
            is_active=True,
            last_active_at=now,
            created_at=now,
            expires_at=expires_at,
        )
        self.sessions[session.id] = session
        return session

    def find_active_session(self, user_id: UUID, token: str) -> SessionRecord | None:
        for session in self.sessions.values():
            if session.user_id == user_id and session.token == token and (
                session.is_active
            ):
                return session
        return None

    def touch_session(self, session_id: UUID, at: datetime) -> None:
        self.sessions[session_id] = replace(
            self.sessions[session_id], last_active_at=at
        )

    def deactivate_session(self, session_id: UUID) -> None:
        self.sessions[session_id] = replace(self.sessions[session_id], is_active=False)


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory booking repository for tests."""

    clock: FakeClock = field(default_factory=FakeClock)
    bookings: dict[UUID, BookingRecord] = field(default_factory=dict)

    def create_booking(self, draft: BookingDraft) -> BookingRecord:
        booking = BookingRecord(
            id=uuid4(),
            user_id=draft.user_id,
            customer_name=draft.customer_name,
            email=draft.email,
            phone=draft.phone,
            service_type=draft.service_type,
            date=draft.date,
            time=draft.time,
            location=draft.location,
            special_instructions=draft.special_instructions,
            booking_type=draft.booking_type,
            status=BookingStatus.PENDING,
            created_at=self.clock(),
        )
        self.bookings[booking.id] = booking
        return booking

    def get_booking(self, booking_id: UUID) -> BookingRecord | None:
        return self.bookings.get(booking_id)

    def list_bookings(self, user_id: str | None) -> list[BookingRecord]:
        rows = [
            booking
            for booking in self.bookings.values()
            if user_id is None or booking.user_id == user_id
        ]
        return sorted(rows, key=lambda booking: booking.created_at, reverse=True)

    def update_status(
        self,
        booking_id: UUID,
        status: BookingStatus,
        expected: BookingStatus | None = None,
    ) -> BookingRecord | None:
        booking = self.bookings.get(booking_id)
        if booking is None or (expected is not None and booking.status != expected):
            return None
        self.bookings[booking_id] = replace(booking, status=status)
        return self.bookings[booking_id]


@dataclass
class InMemoryGalleryRepository(GalleryRepository):
    """In-memory gallery repository for tests."""

    clock: FakeClock = field(default_factory=FakeClock)
    galleries: dict[UUID, GalleryRecord] = field(default_factory=dict)

    def create_gallery(self, draft: GalleryDraft) -> GalleryRecord:
        gallery = GalleryRecord(
            id=uuid4(),
            user_ids=list(draft.user_ids),
            admin_id=draft.admin_id,
            photos=list(draft.photos),
            title=draft.title,
            public_token=draft.public_token,
            expires_at=draft.expires_at,
            auto_delete_enabled=draft.auto_delete_enabled,
            created_at=self.clock(),
        )
        self.galleries[gallery.id] = gallery
        return gallery

    def get_gallery(self, gallery_id: UUID) -> GalleryRecord | None:
        return self.galleries.get(gallery_id)

    def get_by_public_token(self, token: str) -> GalleryRecord | None:
        return next(
            (g for g in self.galleries.values() if g.public_token == token), None
        )

    def list_for_user(self, user_id: UUID) -> list[GalleryRecord]:
        rows = [g for g in self.galleries.values() if user_id in g.user_ids]
        return sorted(rows, key=lambda gallery: gallery.created_at, reverse=True)

    def list_expired(self, now: datetime) -> list[GalleryRecord]:
        return [
            gallery
            for gallery in self.galleries.values()
            if gallery.auto_delete_enabled
            and gallery.expires_at is not None
            and gallery.expires_at < now
        ]

    def delete_gallery(self, gallery_id: UUID) -> bool:
        return self.galleries.pop(gallery_id, None) is not None


@dataclass
class InMemoryInvoiceRepository(InvoiceRepository):
    """In-memory invoice repository for tests."""

    clock: FakeClock = field(default_factory=FakeClock)
    invoices: dict[UUID, InvoiceRecord] = field(default_factory=dict)

    def create_invoice(self, draft: InvoiceDraft) -> InvoiceRecord:
        invoice = InvoiceRecord(
            id=uuid4(),
            user_id=draft.user_id,
            booking_id=draft.booking_id,
            admin_name=draft.admin_name,
            amount=draft.amount,
            description=draft.description,
            due_date=draft.due_date,
            status=draft.status,
            items=list(draft.items),
            created_at=self.clock(),
        )
        self.invoices[invoice.id] = invoice
        return invoice

    def get_invoice(self, invoice_id: UUID) -> InvoiceRecord | None:
        return self.invoices.get(invoice_id)

    def list_invoices(self, user_id: UUID | None) -> list[InvoiceRecord]:
        rows = [
            invoice
            for invoice in self.invoices.values()
            if user_id is None or invoice.user_id == user_id
        ]
        return sorted(rows, key=lambda invoice: invoice.created_at, reverse=True)

    def update_status(
        self, invoice_id: UUID, status: InvoiceStatus
    ) -> InvoiceRecord | None:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            return None
        self.invoices[invoice_id] = replace(invoice, status=status)
        return self.invoices[invoice_id]


@dataclass
class FakeMediaStore(MediaStore):
    """Media store that records uploads and deletions."""

    uploaded: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_upload_after: int | None = None
    fail_delete_for: set[str] = field(default_factory=set)

    async def upload(self, file: IncomingFile, folder: str) -> StoredMedia:
        if (
            self.fail_upload_after is not None
            and len(self.uploaded) >= self.fail_upload_after
        ):
            raise RuntimeError("media host unavailable")
        public_id = f"{folder}/{uuid4().hex}"
        self.uploaded[public_id] = file.content
        return StoredMedia(
            url=f"https://media.test/{public_id}.jpg",
            public_id=public_id,
            size=len(file.content),
        )

    async def delete(self, public_id: str) -> bool:
        if public_id in self.fail_delete_for:
            raise RuntimeError("media host unavailable")
        self.deleted.append(public_id)
        return self.uploaded.pop(public_id, None) is not None


@dataclass
class FakeMailer(Mailer):
    """Mailer that records outgoing messages."""

    sent: list[tuple[str, str, str]] = field(default_factory=list)
    delivered: bool = True
    fail: bool = False

    async def send(self, to: str, subject: str, text: str) -> bool:
        if self.fail:
            raise ConnectionError("smtp unavailable")
        self.sent.append((to, subject, text))
        return self.delivered


def make_file(name: str = "photo.jpg", content: bytes = b"jpeg-bytes") -> IncomingFile:
    return IncomingFile(filename=name, content_type="image/jpeg", content=content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        frontend_url="https://studio.test",
        admin_email=None,
        admin_password=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def user_repository(clock: FakeClock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock=clock)


@pytest.fixture
def session_repository(clock: FakeClock) -> InMemorySessionRepository:
    return InMemorySessionRepository(clock=clock)


@pytest.fixture
def media_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FakeClock,
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
    media_store: FakeMediaStore,
    mailer: FakeMailer,
) -> AppContainer:
    session_service = SessionService(
        repository=session_repository, secret=settings.jwt_secret, now=clock
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository, bcrypt_rounds=4),
        session_service=session_service,
        auth_service=AuthService(
            users=user_repository,
            sessions=session_service,
            mailer=mailer,
            frontend_url=settings.frontend_url,
            bcrypt_rounds=4,
            now=clock,
        ),
        booking_service=BookingService(InMemoryBookingRepository(clock=clock)),
        gallery_service=GalleryService(
            repository=InMemoryGalleryRepository(clock=clock),
            media_store=media_store,
            frontend_url=settings.frontend_url,
            now=clock,
        ),
        invoice_service=InvoiceService(
            repository=InMemoryInvoiceRepository(clock=clock),
            users=user_repository,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def admin_token(container: AppContainer) -> str:
    """Token for a freshly created admin account."""
    admin = container.user_service.ensure_admin(
        "admin@studio.test", "admin-pass", "Prince"
    )
    token, _ = container.session_service.open_session(admin.id, admin.role)
    return token
