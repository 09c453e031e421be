"""Domain models for invoices."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class InvoiceStatus(StrEnum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class InvoiceItem:
    """A billed line with its computed total."""

    description: str
    quantity: float
    unit_price: float
    total: float


@dataclass(frozen=True)
class InvoiceDraft:
    """Validated invoice fields ready to be persisted."""

    user_id: UUID
    booking_id: UUID | None
    admin_name: str | None
    amount: float
    description: str
    due_date: date
    status: InvoiceStatus
    items: list[InvoiceItem]


@dataclass(frozen=True)
class InvoiceRecord:
    """Represents a persisted invoice."""

    id: UUID
    user_id: UUID
    booking_id: UUID | None
    admin_name: str | None
    amount: float
    description: str
    due_date: date
    status: InvoiceStatus
    items: list[InvoiceItem]
    created_at: datetime
