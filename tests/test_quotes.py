import httpx
import pytest

from apps.api.routers import quotes
from apps.api.routers.quotes import FAILURE_MESSAGE
from apps.api.utils import relay as relay_mod
from apps.api.utils.relay import RelayError, build_relay_form, send_quote
from core.models.quotes import QuoteRequest

QUOTE = {
    "name": "Jordan Lee",
    "phone": "647-555-0100",
    "email": "jordan@example.com",
    "service": "sealing",
    "message": "Backyard patio, about 400 sq ft.",
}


def test_relayed_quote_is_saved_as_sent(client, db, relay, enqueued):
    r = client.post("/quotes", json=QUOTE)
    assert r.status_code == 200
    body = r.json()

    assert body["success"] is True
    assert body["status"] == "sent"
    assert body["message"] == "Quote request sent successfully! We'll contact you within 24 hours at 647-555-0100."
    assert relay.sent == ["jordan@example.com"]
    assert enqueued == []

    saved = db.query(QuoteRequest).one()
    assert saved.status == "sent"
    assert saved.sent_at is not None
    assert saved.service == "sealing"


def test_relay_failure_falls_back_to_local_copy(client, db, relay, enqueued):
    relay.fail_all = True
    body = client.post("/quotes", json=QUOTE).json()

    assert body["success"] is True
    assert body["status"] == "pending"
    assert body["message"] == "Quote request received! We'll contact you within 24 hours at 647-555-0100."
    assert enqueued == ["sync_pending_quotes"]

    saved = db.query(QuoteRequest).one()
    assert saved.status == "pending"
    assert saved.relay_error == "relay unavailable"


def test_service_defaults_to_interlocking(client, db):
    payload = {k: v for k, v in QUOTE.items() if k != "service"}
    assert client.post("/quotes", json=payload).status_code == 200
    assert db.query(QuoteRequest).one().service == "interlocking"


@pytest.mark.parametrize(
    "override",
    [
        {"name": "  "},
        {"phone": ""},
        {"message": " \n"},
        {"email": "not-an-email"},
        {"email": "a@b"},
        {"service": "snow_removal"},
    ],
)
def test_invalid_quotes_are_rejected(client, db, override):
    r = client.post("/quotes", json={**QUOTE, **override})
    assert r.status_code == 422
    assert db.query(QuoteRequest).count() == 0


def test_unexpected_error_tells_customer_to_call(client, monkeypatch):
    def broken(quote):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(quotes, "send_quote", broken)
    r = client.post("/quotes", json=QUOTE)

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": FAILURE_MESSAGE}
    assert "(416) 555-1234" in FAILURE_MESSAGE


def test_relay_form_fields():
    q = QuoteRequest(**QUOTE)
    form = build_relay_form(q)

    assert form["service"] == "Paver Sealing (铺路石密封)"
    assert form["subject"] == "New Quote Request - Paver Sealing (铺路石密封)"
    assert form["from_name"] == "Premium Landscaping Services"
    assert form["reply_to"] == "jordan@example.com"
    assert form["access_key"]


def test_send_quote_wraps_transport_errors(monkeypatch):
    def fail(*args, **kwargs):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(relay_mod.httpx, "post", fail)
    with pytest.raises(RelayError):
        send_quote(QuoteRequest(**QUOTE))


def test_send_quote_wraps_http_status_errors(monkeypatch):
    def server_error(url, **kwargs):
        return httpx.Response(500, request=httpx.Request("POST", url))

    monkeypatch.setattr(relay_mod.httpx, "post", server_error)
    with pytest.raises(RelayError):
        send_quote(QuoteRequest(**QUOTE))


def test_send_quote_posts_form(monkeypatch):
    seen = {}

    def ok(url, data=None, timeout=None):
        seen.update(url=url, data=data, timeout=timeout)
        return httpx.Response(200, json={"success": True}, request=httpx.Request("POST", url))

    monkeypatch.setattr(relay_mod.httpx, "post", ok)
    send_quote(QuoteRequest(**QUOTE))

    assert seen["url"] == "https://api.web3forms.com/submit"
    assert seen["data"]["name"] == "Jordan Lee"
