import logging
import re
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from apps.api.data.service_catalog import COMPANY, SERVICES_BY_KEY
from apps.api.utils.relay import RelayError, send_quote
from core.db import get_db
from core.models.quotes import QuoteRequest
from core.queue import enqueue_quote_sync

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FAILURE_MESSAGE = (
    f"Failed to send quote request. Please try again or call us directly at {COMPANY['phone']}."
)


class QuoteIn(BaseModel):
    name: str
    phone: str
    email: str
    service: str = "interlocking"
    message: str

    @field_validator("name", "phone", "message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("service")
    @classmethod
    def known_service(cls, v: str) -> str:
        if v not in SERVICES_BY_KEY:
            raise ValueError(f"Unknown service '{v}'")
        return v


def _submit(req: QuoteIn, db: Session) -> dict:
    quote = QuoteRequest(
        name=req.name,
        phone=req.phone,
        email=req.email,
        service=req.service,
        message=req.message,
        status="pending",
        attempts=1,
    )

    try:
        send_quote(quote)
    except RelayError as e:
        logger.warning("relay failed, keeping quote for retry: %s", e)
        quote.relay_error = str(e)
    else:
        quote.status = "sent"
        quote.sent_at = datetime.utcnow()

    # every request is kept locally, relayed or not
    db.add(quote)
    db.commit()
    db.refresh(quote)

    if quote.status == "sent":
        message = f"Quote request sent successfully! We'll contact you within 24 hours at {quote.phone}."
    else:
        enqueue_quote_sync()
        message = f"Quote request received! We'll contact you within 24 hours at {quote.phone}."

    return {"success": True, "message": message, "quote_id": quote.id, "status": quote.status}


@router.post("")
def submit_quote(req: QuoteIn, db: Session = Depends(get_db)):
    try:
        return _submit(req, db)
    except Exception:
        logger.exception("quote submission failed")
        db.rollback()
        return JSONResponse(status_code=500, content={"success": False, "message": FAILURE_MESSAGE})
