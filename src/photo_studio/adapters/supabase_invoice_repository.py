"""Supabase-backed invoice repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from photo_studio.adapters.supabase_rows import (
    parse_date,
    parse_optional_uuid,
    parse_required_timestamp,
)
from photo_studio.domain.invoices import (
    InvoiceDraft,
    InvoiceItem,
    InvoiceRecord,
    InvoiceStatus,
)
from photo_studio.services.invoices import InvoiceRepository

_TABLE = "invoices"


@dataclass
class SupabaseInvoiceRepository(InvoiceRepository):
    """Supabase implementation for invoices."""

    client: Client

    def create_invoice(self, draft: InvoiceDraft) -> InvoiceRecord:
        """Create an invoice row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(draft.user_id),
                    "booking_id": str(draft.booking_id) if draft.booking_id else None,
                    "admin_name": draft.admin_name,
                    "amount": draft.amount,
                    "description": draft.description,
                    "due_date": draft.due_date.isoformat(),
                    "status": str(draft.status),
                    "items": [
                        {
                            "description": item.description,
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                            "total": item.total,
                        }
                        for item in draft.items
                    ],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create invoice")
        return _parse_invoice(response.data[0])

    def get_invoice(self, invoice_id: UUID) -> InvoiceRecord | None:
        """Return an invoice by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(invoice_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_invoice(response.data[0])

    def list_invoices(self, user_id: UUID | None) -> list[InvoiceRecord]:
        """Return invoices newest first, optionally for one user."""
        query = self.client.table(_TABLE).select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.order("created_at", desc=True).execute()
        return [_parse_invoice(row) for row in response.data or []]

    def update_status(
        self, invoice_id: UUID, status: InvoiceStatus
    ) -> InvoiceRecord | None:
        """Set the invoice status and return the updated row."""
        response = (
            self.client.table(_TABLE)
            .update({"status": str(status)})
            .eq("id", str(invoice_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_invoice(response.data[0])


def _parse_invoice(row: dict[str, object]) -> InvoiceRecord:
    items = row.get("items") or []
    return InvoiceRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        booking_id=parse_optional_uuid(row.get("booking_id")),
        admin_name=row.get("admin_name"),
        amount=float(row.get("amount") or 0.0),
        description=str(row.get("description") or ""),
        due_date=parse_date(row["due_date"]),
        status=InvoiceStatus(row.get("status") or InvoiceStatus.SENT),
        items=[
            InvoiceItem(
                description=str(item.get("description") or ""),
                quantity=float(item.get("quantity") or 0.0),
                unit_price=float(item.get("unit_price") or 0.0),
                total=float(item.get("total") or 0.0),
            )
            for item in items
            if isinstance(item, dict)
        ],
        created_at=parse_required_timestamp(row.get("created_at")),
    )
