# backend/edara/domain/whatsapp.py
"""
WhatsApp deep-link builder (pure, no I/O).

The link only pre-fills a chat; a person still has to press send. Logging a
reminder as sent is done by the caller (services.whatsapp_reminders).
"""
from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

DEFAULT_COUNTRY_CODE = "965"  # Kuwait
DEFAULT_BASE_URL = "https://wa.me"
DEFAULT_SIGNATURE = "Edara Property Management"

# Local mobile numbers are 8 digits
LOCAL_NUMBER_LEN = 8

_STRIP_RE = re.compile(r"[\s\-()]")

# Characters encodeURIComponent leaves alone (besides alphanumerics)
_URI_COMPONENT_SAFE = "-_.!~*'()"


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    1. strip whitespace, hyphens, parentheses
    2. leading "0"            -> country code + rest
    3. no "+" and 8 chars     -> country code + number
    4. leading "+"            -> drop the "+"
    anything else passes through unchanged.
    """
    cleaned = _STRIP_RE.sub("", phone or "")

    if cleaned.startswith("0"):
        return country_code + cleaned[1:]
    if not cleaned.startswith("+") and len(cleaned) == LOCAL_NUMBER_LEN:
        return country_code + cleaned
    if cleaned.startswith("+"):
        return cleaned[1:]
    return cleaned


def format_amount(amount: Any, currency: str = "KWD") -> str:
    # KWD has 3 minor-unit digits (fils)
    return f"{float(amount or 0.0):.3f} {currency}"


def build_reminder_message(
    tenant_name: str,
    invoice_number: str,
    amount: Any,
    due_date: Any,
    *,
    signature: str = DEFAULT_SIGNATURE,
    currency: str = "KWD",
) -> str:
    due = due_date.isoformat() if hasattr(due_date, "isoformat") else str(due_date)
    return "\n".join(
        [
            f"Hello {tenant_name},",
            "",
            "This is a friendly reminder that your payment is due soon.",
            "",
            f"Invoice: {invoice_number}",
            f"Amount: {format_amount(amount, currency)}",
            f"Due Date: {due}",
            "",
            "Please ensure timely payment to avoid any late fees.",
            "",
            "Thank you,",
            signature,
        ]
    )


def get_whatsapp_link(
    phone: str,
    message: str,
    *,
    country_code: str = DEFAULT_COUNTRY_CODE,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    normalized = normalize_phone(phone, country_code=country_code)
    return f"{base_url.rstrip('/')}/{normalized}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
