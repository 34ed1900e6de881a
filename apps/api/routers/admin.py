import base64
import binascii
import logging
import time
from pathlib import PurePosixPath
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import AfterValidator, BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from apps.api.data.service_catalog import SERVICES
from apps.api.utils.quote_email import render_quote_email
from apps.api.utils.serializers import image_out, quote_out, service_out
from core.db import get_db
from core.models.quotes import QuoteRequest
from core.models.site import IMAGE_CATEGORIES, Image, Service
from core.queue import enqueue_quote_sync
from core.storage import storage_put

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_category(v: str) -> str:
    if v not in IMAGE_CATEGORIES:
        raise ValueError(f"Unknown category '{v}'")
    return v


ImageCategory = Annotated[str, AfterValidator(_check_category)]


class ImageUpload(BaseModel):
    title: str
    description: str | None = None
    category: ImageCategory
    base64_data: str
    file_name: str
    mime_type: str


class GoogleDriveImage(BaseModel):
    title: str
    description: str | None = None
    category: ImageCategory
    google_drive_file_id: str
    google_drive_url: str


class ImageUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    display_order: int | None = None
    is_active: int | None = Field(default=None, ge=0, le=1)

    @field_validator("title", "display_order", "is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ServiceCreate(BaseModel):
    key: str
    title_en: str
    title_zh: str
    description_en: str | None = None
    description_zh: str | None = None
    featured_image_id: int | None = None
    display_order: int = 0
    is_active: int = Field(default=1, ge=0, le=1)


class ServiceUpdate(BaseModel):
    title_en: str | None = None
    title_zh: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    featured_image_id: int | None = None
    display_order: int | None = None
    is_active: int | None = Field(default=None, ge=0, le=1)

    @field_validator("title_en", "title_zh", "display_order", "is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


def _get_image(db: Session, image_id: int) -> Image:
    image = db.query(Image).filter(Image.id == image_id).one_or_none()
    if image is None:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


# ---- images ----

@router.get("/images")
def list_images(db: Session = Depends(get_db)):
    rows = db.query(Image).filter(Image.is_active == 1).order_by(Image.created_at.desc(), Image.id.desc()).all()
    return [image_out(r) for r in rows]


@router.get("/images/category/{category}")
def images_by_category(category: str, db: Session = Depends(get_db)):
    rows = (
        db.query(Image)
        .filter(Image.category == category)
        .order_by(Image.display_order.asc(), Image.id.asc())
        .all()
    )
    return [image_out(r) for r in rows]


@router.get("/images/{image_id}")
def get_image(image_id: int, db: Session = Depends(get_db)):
    image = db.query(Image).filter(Image.id == image_id).one_or_none()
    return image_out(image) if image else None


@router.post("/images/upload")
def upload_image(req: ImageUpload, db: Session = Depends(get_db)):
    try:
        data = base64.b64decode(req.base64_data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="Invalid base64 image data")

    file_name = PurePosixPath(req.file_name.replace("\\", "/")).name or "upload"
    key = f"images/{req.category}/{int(time.time() * 1000)}-{file_name}"
    try:
        stored = storage_put(key, data, req.mime_type)
        image = Image(
            title=req.title,
            description=req.description,
            category=req.category,
            url=stored["url"],
            source="local",
            mime_type=req.mime_type,
            file_size=len(data),
        )
        db.add(image)
        db.commit()
        db.refresh(image)
    except Exception:
        logger.exception("image upload failed for %s", key)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to upload image")

    return {"success": True, "id": image.id, "url": image.url, "message": "Image uploaded successfully"}


@router.post("/images/google-drive")
def add_google_drive_image(req: GoogleDriveImage, db: Session = Depends(get_db)):
    image = Image(
        title=req.title,
        description=req.description,
        category=req.category,
        url=req.google_drive_url,
        source="google_drive",
        google_drive_file_id=req.google_drive_file_id,
    )
    db.add(image)
    db.commit()
    db.refresh(image)
    return {"success": True, "id": image.id, "message": "Google Drive image added successfully"}


@router.patch("/images/{image_id}")
def update_image(image_id: int, req: ImageUpdate, db: Session = Depends(get_db)):
    image = _get_image(db, image_id)
    for field, value in req.model_dump(exclude_unset=True).items():
        setattr(image, field, value)
    db.commit()
    return {"success": True, "message": "Image updated successfully"}


@router.delete("/images/{image_id}")
def delete_image(image_id: int, db: Session = Depends(get_db)):
    image = _get_image(db, image_id)
    db.delete(image)
    db.commit()
    return {"success": True, "message": "Image deleted successfully"}


# ---- services ----

@router.get("/services")
def list_services(db: Session = Depends(get_db)):
    rows = db.query(Service).filter(Service.is_active == 1).order_by(Service.display_order.asc()).all()
    return [service_out(s) for s in rows]


@router.post("/services")
def create_service(req: ServiceCreate, db: Session = Depends(get_db)):
    if db.query(Service).filter(Service.key == req.key).one_or_none():
        raise HTTPException(status_code=409, detail=f"Service '{req.key}' already exists")
    svc = Service(**req.model_dump())
    db.add(svc)
    db.commit()
    db.refresh(svc)
    return {"success": True, "id": svc.id}


@router.post("/services/seed")
def seed_services(db: Session = Depends(get_db)):
    existing = {k for (k,) in db.query(Service.key).all()}
    created = []
    for order, info in enumerate(SERVICES):
        if info.key in existing:
            continue
        db.add(
            Service(
                key=info.key,
                title_en=info.title_en,
                title_zh=info.title_zh,
                description_en=info.description,
                display_order=order,
            )
        )
        created.append(info.key)
    db.commit()
    return {"success": True, "created": created}


@router.get("/services/{key}")
def get_service(key: str, db: Session = Depends(get_db)):
    svc = db.query(Service).filter(Service.key == key).one_or_none()
    return service_out(svc) if svc else None


@router.patch("/services/{service_id}")
def update_service(service_id: int, req: ServiceUpdate, db: Session = Depends(get_db)):
    svc = db.query(Service).filter(Service.id == service_id).one_or_none()
    if svc is None:
        raise HTTPException(status_code=404, detail="Service not found")
    for field, value in req.model_dump(exclude_unset=True).items():
        setattr(svc, field, value)
    db.commit()
    return {"success": True, "message": "Service updated successfully"}


# ---- saved quote requests ----

@router.get("/quotes")
def list_quotes(db: Session = Depends(get_db)):
    rows = db.query(QuoteRequest).order_by(QuoteRequest.id.desc()).all()
    return [quote_out(q) for q in rows]


@router.get("/quotes/{quote_id}/email")
def quote_email_preview(quote_id: int, db: Session = Depends(get_db)):
    quote = db.query(QuoteRequest).filter(QuoteRequest.id == quote_id).one_or_none()
    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    return render_quote_email(quote, received_at=quote.created_at)


@router.post("/quotes/sync")
def sync_quotes(db: Session = Depends(get_db)):
    pending = db.query(QuoteRequest).filter(QuoteRequest.status == "pending").count()
    job_id = enqueue_quote_sync() if pending else None
    return {"ok": True, "pending": pending, "job_id": job_id}


@router.delete("/quotes")
def clear_quotes(db: Session = Depends(get_db)):
    deleted = db.query(QuoteRequest).delete()
    db.commit()
    logger.info("cleared %d saved quotes", deleted)
    return {"ok": True, "deleted": deleted}
