"""
Public signup intake.

The only unauthenticated write. Every field is validated here; free-text
fields that may be echoed back to staff are HTML-escaped before storage.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from email_validator import EmailNotValidError, validate_email
from markupsafe import escape

from app.fairgroup.errors import ValidationError
from app.fairgroup.modules.public.models import PublicContact

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

SYSTEM_IMPACT_CHOICES = ("Yes", "No", "Prefer not to say")
THANK_YOU_MESSAGE = "Thank you, we'll follow up with more information."

# markupsafe leaves these alone; stored text escapes them too.
_EXTRA_ESCAPES = {"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"}


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _escaped(value) -> str | None:
    value = _text(value)
    if not value:
        return None
    escaped = str(escape(value))
    for char, entity in _EXTRA_ESCAPES.items():
        escaped = escaped.replace(char, entity)
    return escaped


def normalize_email(value) -> str | None:
    """Validated, lower-cased address, or None when `value` is not a usable email."""
    value = _text(value)
    if not value:
        return None
    try:
        info = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return None
    return info.normalized.lower()


def validate_signup_payload(payload: dict) -> list[dict]:
    """Returns a list of {field, message} errors; empty when the payload is acceptable."""
    errors = []
    if not _text(payload.get("first_name")):
        errors.append({"field": "first_name", "message": "First name is required."})
    if not _text(payload.get("last_name")):
        errors.append({"field": "last_name", "message": "Last name is required."})
    email = normalize_email(payload.get("email"))
    if email is None or len(email) > 320:
        errors.append({"field": "email", "message": "A valid email address is required."})
    if payload.get("system_impact") not in SYSTEM_IMPACT_CHOICES:
        errors.append(
            {
                "field": "system_impact",
                "message": f"system_impact must be one of: {', '.join(SYSTEM_IMPACT_CHOICES)}",
            }
        )
    return errors


def create_public_contact(s: "Session", payload: dict) -> PublicContact:
    errors = validate_signup_payload(payload)
    if errors:
        raise ValidationError("Validation failed", details=errors)

    contact = PublicContact(
        first_name=_escaped(payload.get("first_name")),
        last_name=_escaped(payload.get("last_name")),
        email=normalize_email(payload.get("email")),
        phone=_escaped(payload.get("phone")),
        county_or_city=_escaped(payload.get("county_or_city")),
        system_impact=payload["system_impact"],
        involvement_interest=_text(payload.get("involvement_interest")) or None,
    )
    s.add(contact)
    s.flush()
    logger.info("Public signup stored (contact_id=%s)", contact.id)
    return contact
