"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from collabhunts.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict) and isinstance(parsed.get("errors"), list):
        messages = [
            str(item["message"])
            for item in parsed["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)

    try:
        return json.dumps(parsed)
    except (TypeError, ValueError):
        return None


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.error("SendGrid API request failed without details")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        _log_sendgrid_failure(
            getattr(exc, "status_code", None), getattr(exc, "body", None)
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def _format_amount(amount_cents: int) -> str:
    return f"${amount_cents / 100:.2f}"


def _button(text: str, path: str) -> str:
    base_url = get_settings().app_base_url.rstrip("/")
    return f'<p><a href="{base_url}{path}">{escape(text)}</a></p>'


def send_creator_payment_auto_released_email(
    email: str, *, brand_name: str, amount_cents: int
) -> bool:
    """Tell the creator their payment was released without a brand review."""

    subject = f"Payment auto-released for {brand_name} booking"
    html_content = "".join(
        (
            "<p>Good news!</p>",
            f"<p>The payment for your booking with <strong>{escape(brand_name)}</strong> "
            "has been automatically released.</p>",
            f"<p><strong>Amount:</strong> {_format_amount(amount_cents)}</p>",
            "<p>Since the brand didn't review your deliverables within 72 hours, the "
            "payment was automatically released to protect your work.</p>",
            _button("View Earnings", "/creator-dashboard?tab=payouts"),
        )
    )
    return send_email(subject, html_content, email)


def send_brand_payment_auto_released_email(
    email: str, *, creator_name: str, amount_cents: int
) -> bool:
    """Tell the brand the review window closed and the payment was released."""

    subject = f"Payment auto-released to {creator_name}"
    html_content = "".join(
        (
            f"<p>The payment for your booking with <strong>{escape(creator_name)}</strong> "
            "has been automatically released.</p>",
            f"<p><strong>Amount Released:</strong> {_format_amount(amount_cents)}</p>",
            "<p>Since the deliverables weren't reviewed within 72 hours, the payment "
            "was automatically released to protect the creator.</p>",
            _button("View Booking", "/brand-dashboard?tab=bookings"),
        )
    )
    return send_email(subject, html_content, email)


def send_brand_review_reminder_email(
    email: str,
    *,
    creator_name: str,
    amount_cents: int,
    final_warning: bool,
) -> bool:
    """Remind the brand to review deliverables before the payment auto-releases."""

    if final_warning:
        subject = "URGENT: less than 1 hour left to review deliverables!"
        lead = (
            "<p><strong>Final reminder!</strong> You have less than 1 hour to review "
            f"the deliverables from <strong>{escape(creator_name)}</strong>.</p>"
        )
    else:
        subject = f"24 hours left to review {creator_name}'s deliverables"
        lead = (
            "<p>You have <strong>24 hours</strong> left to review the deliverables "
            f"from <strong>{escape(creator_name)}</strong>.</p>"
        )
    html_content = "".join(
        (
            lead,
            "<p>If you don't review the deliverables within 72 hours of submission, "
            f"the payment ({_format_amount(amount_cents)}) will be automatically "
            "released to the creator.</p>",
            _button("Review Now", "/brand-dashboard?tab=bookings"),
        )
    )
    return send_email(subject, html_content, email)


def send_admin_dispute_escalated_email(
    email: str,
    *,
    brand_name: str,
    creator_name: str,
    amount_cents: int,
    resolution_deadline: datetime,
) -> bool:
    """Ask an admin to review a dispute whose response deadline lapsed."""

    subject = "Dispute escalated - Admin review required"
    html_content = "".join(
        (
            "<p>A dispute has been escalated and requires immediate admin review.</p>",
            f"<p><strong>Parties:</strong> {escape(brand_name)} vs {escape(creator_name)}<br>"
            f"<strong>Amount:</strong> {_format_amount(amount_cents)}<br>"
            f"<strong>Resolution Deadline:</strong> {resolution_deadline.isoformat()}</p>",
            _button("Review Dispute", "/admin?tab=disputes"),
        )
    )
    return send_email(subject, html_content, email)



def send_dispute_response_needed_email(
    email: str,
    *,
    other_party_name: str,
    hours_remaining: int,
    dashboard_path: str,
) -> bool:
    """Remind the responding party that their dispute response is due."""

    subject = f"Dispute response needed - {hours_remaining}h remaining"
    html_content = "".join(
        (
            f"<p>You have <strong>{hours_remaining} hours</strong> left to respond to "
            f"the dispute from <strong>{escape(other_party_name)}</strong>.</p>",
            "<p><strong>Failing to respond may result in a decision against you."
            "</strong></p>",
            _button("Respond Now", dashboard_path),
        )
    )
    return send_email(subject, html_content, email)
