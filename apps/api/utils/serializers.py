from core.models.quotes import QuoteRequest
from core.models.site import Image, Service


def _iso(dt):
    return dt.isoformat() if dt else None


def image_out(r: Image) -> dict:
    return {
        "id": r.id,
        "title": r.title,
        "description": r.description,
        "category": r.category,
        "url": r.url,
        "source": r.source,
        "google_drive_file_id": r.google_drive_file_id,
        "display_order": r.display_order,
        "is_active": r.is_active,
        "width": r.width,
        "height": r.height,
        "file_size": r.file_size,
        "mime_type": r.mime_type,
        "created_at": _iso(r.created_at),
        "updated_at": _iso(r.updated_at),
    }


def service_out(s: Service) -> dict:
    return {
        "id": s.id,
        "key": s.key,
        "title_en": s.title_en,
        "title_zh": s.title_zh,
        "description_en": s.description_en,
        "description_zh": s.description_zh,
        "featured_image_id": s.featured_image_id,
        "display_order": s.display_order,
        "is_active": s.is_active,
    }


def quote_out(q: QuoteRequest) -> dict:
    return {
        "id": q.id,
        "name": q.name,
        "phone": q.phone,
        "email": q.email,
        "service": q.service,
        "message": q.message,
        "status": q.status,
        "relay_error": q.relay_error,
        "attempts": q.attempts,
        "created_at": _iso(q.created_at),
        "sent_at": _iso(q.sent_at),
    }
