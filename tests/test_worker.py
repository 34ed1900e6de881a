from apps.worker.jobs import MAX_ATTEMPTS, sync_pending_quotes
from core.models.quotes import QuoteRequest


def _quote(email, status="pending", attempts=1):
    return QuoteRequest(
        name="Sam", phone="905-555-0199", email=email, service="relevelling",
        message="Sunken driveway", status=status, attempts=attempts,
    )


def test_sync_sends_pending_and_keeps_failures(db, relay):
    db.add_all([_quote("ok@example.com"), _quote("down@example.com"), _quote("done@example.com", status="sent")])
    db.commit()
    relay.fail_for = {"down@example.com"}

    result = sync_pending_quotes()

    assert result == {"ok": True, "sent": 1, "pending": 1}
    assert relay.sent == ["ok@example.com"]

    db.expire_all()
    by_email = {q.email: q for q in db.query(QuoteRequest).all()}
    assert by_email["ok@example.com"].status == "sent"
    assert by_email["ok@example.com"].sent_at is not None
    assert by_email["ok@example.com"].attempts == 2
    assert by_email["down@example.com"].status == "pending"
    assert by_email["down@example.com"].relay_error == "relay unavailable"
    assert by_email["down@example.com"].attempts == 2


def test_sync_gives_up_after_max_attempts(db, relay):
    db.add(_quote("stale@example.com", attempts=MAX_ATTEMPTS))
    db.commit()

    assert sync_pending_quotes() == {"ok": True, "sent": 0, "pending": 0}
    assert relay.sent == []
