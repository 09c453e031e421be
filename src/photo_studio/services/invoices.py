"""Invoice creation and listing."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from photo_studio.domain.errors import InvalidInputError, NotFoundError
from photo_studio.domain.invoices import (
    InvoiceDraft,
    InvoiceItem,
    InvoiceRecord,
    InvoiceStatus,
)
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.users import UserRepository

_AMOUNT_TOLERANCE = 0.01


class InvoiceRepository(Protocol):
    """Persistence interface for invoices."""

    def create_invoice(self, draft: InvoiceDraft) -> InvoiceRecord:
        """Create an invoice and return it."""

    def get_invoice(self, invoice_id: UUID) -> InvoiceRecord | None:
        """Return an invoice by id, if present."""

    def list_invoices(self, user_id: UUID | None) -> list[InvoiceRecord]:
        """Return invoices newest first, optionally for one user."""

    def update_status(
        self, invoice_id: UUID, status: InvoiceStatus
    ) -> InvoiceRecord | None:
        """Set the invoice status and return the updated row."""


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: float
    unit_price: float


@dataclass
class InvoiceService:
    """Application service for billing records."""

    repository: InvoiceRepository
    users: UserRepository

    def create_invoice(  # noqa: PLR0913
        self,
        admin_id: UUID,
        user_id: UUID,
        description: str,
        due_date: date,
        items: list[LineItem],
        amount: float | None = None,
        booking_id: UUID | None = None,
        admin_name: str | None = None,
        status: InvoiceStatus = InvoiceStatus.SENT,
    ) -> InvoiceRecord:
        """Create an invoice whose amount agrees with its line items."""
        priced = [
            InvoiceItem(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=round(item.quantity * item.unit_price, 2),
            )
            for item in items
        ]
        items_total = round(sum(item.total for item in priced), 2)
        if amount is None:
            if not priced:
                raise InvalidInputError("Invoice amount is required")
            amount = items_total
        elif priced and round(abs(amount - items_total), 2) > _AMOUNT_TOLERANCE:
            raise InvalidInputError("Invoice amount does not match line items")

        if not admin_name:
            admin = self.users.get_by_id(admin_id)
            admin_name = admin.name if admin else None

        return self.repository.create_invoice(
            InvoiceDraft(
                user_id=user_id,
                booking_id=booking_id,
                admin_name=admin_name,
                amount=round(amount, 2),
                description=description,
                due_date=due_date,
                status=status,
                items=priced,
            )
        )

    def list_invoices(
        self, caller: AuthContext, user_id: UUID | None = None
    ) -> list[InvoiceRecord]:
        """Clients see their own invoices; admins may filter by user."""
        if not caller.is_admin:
            return self.repository.list_invoices(caller.user_id)
        return self.repository.list_invoices(user_id)

    def update_status(self, invoice_id: UUID, status: InvoiceStatus) -> InvoiceRecord:
        updated = self.repository.update_status(invoice_id, status)
        if updated is None:
            raise NotFoundError("Invoice not found")
        return updated
