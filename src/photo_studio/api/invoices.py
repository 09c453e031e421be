"""Invoice endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from photo_studio.api.dependencies import get_container, require_admin, require_auth
from photo_studio.api.schemas import InvoiceCreateRequest, InvoiceStatusRequest
from photo_studio.api.serializers import serialize_invoice
from photo_studio.containers import AppContainer
from photo_studio.domain.sessions import AuthContext
from photo_studio.services.invoices import LineItem

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreateRequest,
    caller: AuthContext = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Bill a client, optionally against one of their bookings."""
    invoice = container.invoice_service.create_invoice(
        admin_id=caller.user_id,
        user_id=payload.user_id,
        description=payload.description,
        due_date=payload.due_date,
        items=[
            LineItem(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in payload.items
        ],
        amount=payload.amount,
        booking_id=payload.booking_id,
        admin_name=payload.admin_name,
        status=payload.status,
    )
    return {"message": "Invoice created", "invoice": serialize_invoice(invoice)}


@router.get("")
async def list_invoices(
    user_id: UUID | None = Query(default=None, alias="userId"),
    caller: AuthContext = Depends(require_auth),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Clients see their own invoices; admins may filter by ``userId``."""
    invoices = container.invoice_service.list_invoices(caller, user_id)
    return [serialize_invoice(invoice) for invoice in invoices]


@router.put("/{invoice_id}/status", dependencies=[Depends(require_admin)])
async def update_invoice_status(
    invoice_id: UUID,
    payload: InvoiceStatusRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    invoice = container.invoice_service.update_status(invoice_id, payload.status)
    return {"message": "Status updated", "invoice": serialize_invoice(invoice)}
