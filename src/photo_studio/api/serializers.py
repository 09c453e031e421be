"""JSON shapes returned to the web client."""

from photo_studio.domain.bookings import BookingRecord
from photo_studio.domain.galleries import GalleryPhoto, GalleryRecord
from photo_studio.domain.invoices import InvoiceRecord
from photo_studio.domain.models import UserRecord


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Public projection of a user; credentials and codes are never included."""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": str(user.role),
        "phone": user.phone,
        "profile_completed": user.profile_completed,
        "verified": user.verified,
        "createdAt": user.created_at.isoformat(),
    }


def serialize_booking(booking: BookingRecord) -> dict[str, object]:
    return {
        "id": str(booking.id),
        "userId": booking.user_id,
        "customerName": booking.customer_name,
        "email": booking.email,
        "phone": booking.phone,
        "serviceType": booking.service_type,
        "date": booking.date.isoformat(),
        "time": booking.time,
        "location": booking.location,
        "specialInstructions": booking.special_instructions,
        "bookingType": str(booking.booking_type),
        "status": str(booking.status),
        "createdAt": booking.created_at.isoformat(),
    }


def _serialize_photo(photo: GalleryPhoto) -> dict[str, object]:
    return {
        "path": photo.url,
        "publicId": photo.public_id,
        "originalName": photo.original_name,
        "mimeType": photo.mime_type,
        "size": photo.size,
        "uploadedAt": photo.uploaded_at.isoformat(),
    }


def serialize_gallery(gallery: GalleryRecord) -> dict[str, object]:
    return {
        "id": str(gallery.id),
        "userIds": [str(user_id) for user_id in gallery.user_ids],
        "adminId": str(gallery.admin_id) if gallery.admin_id else None,
        "photos": [_serialize_photo(photo) for photo in gallery.photos],
        "title": gallery.title,
        "publicToken": gallery.public_token,
        "expiresAt": gallery.expires_at.isoformat() if gallery.expires_at else None,
        "isAutoDeleteEnabled": gallery.auto_delete_enabled,
        "createdAt": gallery.created_at.isoformat(),
    }


def serialize_invoice(invoice: InvoiceRecord) -> dict[str, object]:
    return {
        "id": str(invoice.id),
        "userId": str(invoice.user_id),
        "bookingId": str(invoice.booking_id) if invoice.booking_id else None,
        "adminName": invoice.admin_name,
        "amount": invoice.amount,
        "description": invoice.description,
        "dueDate": invoice.due_date.isoformat(),
        "status": str(invoice.status),
        "items": [
            {
                "description": item.description,
                "quantity": item.quantity,
                "unitPrice": item.unit_price,
                "total": item.total,
            }
            for item in invoice.items
        ],
        "createdAt": invoice.created_at.isoformat(),
    }
