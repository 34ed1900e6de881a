from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from apps.api.utils.serializers import image_out, service_out
from core.db import get_db
from core.models.site import Image, Service

router = APIRouter()


@router.get("/images")
def public_images(category: str | None = None, db: Session = Depends(get_db)):
    q = db.query(Image).filter(Image.is_active == 1)
    if category:
        q = q.filter(Image.category == category)
    rows = q.order_by(Image.display_order.asc(), Image.id.asc()).all()
    return [image_out(r) for r in rows]


@router.get("/services")
def public_services(db: Session = Depends(get_db)):
    rows = db.query(Service).filter(Service.is_active == 1).order_by(Service.display_order.asc()).all()
    return [service_out(s) for s in rows]
