import logging

import requests

from airport_billing.core.config import settings

logger = logging.getLogger("app")

RESEND_URL = "https://api.resend.com/emails"


def _post_email(to_email: str, subject: str, body: str):
    payload = {
        "from": settings.RESEND_FROM_EMAIL,
        "to": [to_email],
        "subject": subject,
        "text": body,
    }

    headers = {
        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }

    response = requests.post(RESEND_URL, json=payload, headers=headers, timeout=10)

    if response.status_code >= 400:
        raise Exception(f"Email sending failed: {response.text}")


def send_email(to_email: str | None, subject: str, body: str) -> bool:
    """Best-effort delivery. Failures are logged, never raised or retried."""
    if not to_email:
        logger.warning(f"Email '{subject}' skipped: no recipient")
        return False

    if not settings.RESEND_API_KEY:
        logger.warning(f"Email '{subject}' to {to_email} skipped: RESEND_API_KEY not configured")
        return False

    try:
        _post_email(to_email, subject, body)
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {str(e)}")
        return False

    logger.info(f"Email sent to {to_email}: {subject}")
    return True


def send_low_stock_alert(signal) -> bool:
    subject = f"Low Stock Alert: {signal.product_name}"
    body = f"""
Dear {signal.vendor_name or 'Vendor'},

The product "{signal.product_name}" in your shop "{signal.shop_name}" is running low.

Current Stock: {signal.remaining}
Threshold: {signal.threshold}

Please restock soon.

Regards,
Airport Inventory System
""".strip()

    return send_email(signal.vendor_email, subject, body)


def send_approval_notice(to_email: str, name: str, subject_kind: str, approved: bool) -> bool:
    # subject_kind: "vendor account", "shop", "cashier"
    decision = "approved" if approved else "rejected"
    subject = f"Your {subject_kind} has been {decision}"

    if approved:
        next_step = "You can now log in and start using the Airport Inventory System."
    else:
        next_step = "Please contact the airport administration if you believe this is a mistake."

    body = f"""
Dear {name or 'Vendor'},

Your {subject_kind} has been {decision} by the airport administration.

{next_step}

Regards,
Airport Inventory System
""".strip()

    return send_email(to_email, subject, body)
