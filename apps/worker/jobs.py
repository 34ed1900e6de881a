import logging
from datetime import datetime

from sqlalchemy.orm import Session

from apps.api.utils.relay import RelayError, send_quote
from core.db import SessionLocal
from core.models.quotes import QuoteRequest

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10


def _pending_quotes(db: Session) -> list[QuoteRequest]:
    return (
        db.query(QuoteRequest)
        .filter(QuoteRequest.status == "pending", QuoteRequest.attempts < MAX_ATTEMPTS)
        .order_by(QuoteRequest.id.asc())
        .all()
    )


def sync_pending_quotes():
    """Re-send every saved quote the relay has not accepted yet."""
    with SessionLocal() as db:
        sent = 0
        still_pending = 0
        for quote in _pending_quotes(db):
            quote.attempts = (quote.attempts or 0) + 1
            try:
                send_quote(quote)
            except RelayError as e:
                quote.relay_error = str(e)
                still_pending += 1
                logger.warning("quote %s still pending after %d attempts: %s", quote.id, quote.attempts, e)
            else:
                quote.status = "sent"
                quote.sent_at = datetime.utcnow()
                quote.relay_error = None
                sent += 1
            db.commit()

        logger.info("quote sync: %d sent, %d pending", sent, still_pending)
        return {"ok": True, "sent": sent, "pending": still_pending}
