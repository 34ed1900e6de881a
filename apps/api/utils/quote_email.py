from __future__ import annotations

from datetime import datetime
from html import escape

from apps.api.data.service_catalog import COMPANY, service_display_name


def quote_subject(service: str) -> str:
    return f"New Quote Request - {service_display_name(service)}"


def _field(label: str, value: str, pre_wrap: bool = False) -> str:
    style = ' style="white-space: pre-wrap;"' if pre_wrap else ""
    return (
        '<div class="field">'
        f'<div class="label">{label}</div>'
        f'<div class="value"{style}>{value}</div>'
        "</div>"
    )


def render_quote_html(quote, received_at: datetime | None = None) -> str:
    """HTML body for the office inbox. Customer-supplied fields are escaped."""
    received = (received_at or datetime.utcnow()).strftime("%Y-%m-%d %H:%M")
    fields = "\n".join(
        [
            _field("Customer Name:", escape(quote.name)),
            _field("Phone Number:", escape(quote.phone)),
            _field("Email Address:", escape(quote.email)),
            _field("Service Interested In:", escape(service_display_name(quote.service))),
            _field("Project Details:", escape(quote.message), pre_wrap=True),
        ]
    )
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f9f9; }}
    .header {{ background-color: #16a34a; color: white; padding: 20px; text-align: center; }}
    .content {{ background-color: white; padding: 20px; border: 1px solid #ddd; }}
    .field {{ margin-bottom: 15px; padding-bottom: 15px; border-bottom: 1px solid #eee; }}
    .label {{ font-weight: bold; color: #16a34a; margin-bottom: 5px; }}
    .footer {{ margin-top: 20px; font-size: 12px; color: #666; text-align: center; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>New Quote Request</h1>
      <p>{COMPANY['name']}</p>
    </div>
    <div class="content">
{fields}
      <div class="footer">
        <p>Received: {received}</p>
        <p>Please contact the customer as soon as possible to provide a quote.</p>
      </div>
    </div>
  </div>
</body>
</html>"""


def render_quote_text(quote) -> str:
    return (
        "New Quote Request\n\n"
        f"Customer Name: {quote.name}\n"
        f"Phone: {quote.phone}\n"
        f"Email: {quote.email}\n"
        f"Service: {service_display_name(quote.service)}\n\n"
        "Project Details:\n"
        f"{quote.message}"
    )


def render_quote_email(quote, received_at: datetime | None = None) -> dict:
    return {
        "subject": quote_subject(quote.service),
        "reply_to": quote.email,
        "html": render_quote_html(quote, received_at=received_at),
        "text": render_quote_text(quote),
    }
