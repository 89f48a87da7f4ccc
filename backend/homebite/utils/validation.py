"""Boundary checks applied by services before any storage access.

These mirror the constraints of the data model so that they hold no matter
which database sits behind the repositories.
"""
from typing import Dict, Iterable, Optional

from homebite.errors import ValidationError

# largest value an integer primary key column can hold
MAX_ID = 2**63 - 1
MAX_QUANTITY = 1000
MAX_PRICE_CENTS = 100_000_000
MAX_INSTRUCTIONS_LENGTH = 200
MAX_NOTES_LENGTH = 500

REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "contact_number")
OPTIONAL_ADDRESS_FIELDS = ("landmark",)


def require_id(value, field: str) -> int:
    if value is None:
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1 or value > MAX_ID:
        raise ValidationError(f"Invalid {field} format")
    return value


def validate_quantity(quantity, minimum: int = 1) -> int:
    if quantity is None:
        raise ValidationError("quantity is required")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity must be an integer")
    if quantity < minimum:
        raise ValidationError(f"Quantity must be at least {minimum}")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity cannot be more than {MAX_QUANTITY}")
    return quantity


def _bounded_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(f"{field} cannot be more than {max_length} characters")
    return value


def validate_special_instructions(value: Optional[str]) -> Optional[str]:
    return _bounded_text(value, "special_instructions", MAX_INSTRUCTIONS_LENGTH)


def validate_note(value: Optional[str], field: str) -> Optional[str]:
    return _bounded_text(value, field, MAX_NOTES_LENGTH)


def validate_delivery_address(address: Optional[Dict]) -> Dict[str, str]:
    if not address:
        raise ValidationError("Missing required fields: delivery_address")
    cleaned = {}
    for field in REQUIRED_ADDRESS_FIELDS:
        value = (address.get(field) or "").strip()
        if not value:
            raise ValidationError(f"Missing delivery address field: {field}")
        cleaned[field] = value
    for field in OPTIONAL_ADDRESS_FIELDS:
        value = (address.get(field) or "").strip()
        if value:
            cleaned[field] = value
    return cleaned


def validate_choice(value: Optional[str], field: str, choices: Iterable[str]) -> str:
    choices = list(choices)
    if not value:
        raise ValidationError(f"{field} is required")
    if value not in choices:
        raise ValidationError(f"Invalid {field} '{value}'; expected one of: {', '.join(choices)}")
    return value
