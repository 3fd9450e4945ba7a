"""Shared validation utilities"""

import re
from datetime import date

from ..config import DEFAULT_COUNTRY_CODE


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Normalize a phone number to E.164-like form.

    Numbers without a leading "+" get the default country code prepended,
    so "98765 43210" and "+919876543210" resolve to the same patient.

    Raises:
        ValueError: If the number is empty or the result is not "+" followed by 8-15 digits
    """
    if not phone or not phone.strip():
        raise ValueError("Phone number is required")

    cleaned = re.sub(r"[\s\-().]", "", phone)
    if not cleaned.startswith("+"):
        cleaned = f"{country_code}{cleaned}"

    if not re.fullmatch(r"\+\d{8,15}", cleaned):
        raise ValueError("Phone number must contain 8 to 15 digits")

    return cleaned


def validate_iso_date(value: str) -> str:
    """Validate a YYYY-MM-DD calendar date and return it unchanged"""
    if not isinstance(value, str) or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid calendar date: {value}") from e
    return value
