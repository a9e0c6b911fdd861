"""Shared utilities used across the booking engine."""

import re


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("0912 345 678")
        '0912345678'
        >>> normalize_phone("+886 (912) 345-678")
        '+886912345678'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def normalize_contact(contact_type: str, value: str) -> str:
    """Normalize a contact value according to its channel.

    Phone numbers keep digits only, emails are lower-cased, and social
    handles lose a leading ``@``.
    """
    value = value.strip()
    if contact_type == "phone":
        return normalize_phone(value)
    if contact_type == "email":
        return value.lower()
    if contact_type in ("ig", "twitter"):
        return value.lstrip("@")
    return value
