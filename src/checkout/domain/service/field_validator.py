"""Domain service: buyer form validation.

Each rule is checked independently, so several fields can fail at
once.  The whole mapping is rebuilt on every call; an empty mapping
means the form may be submitted.
"""

from __future__ import annotations

import re

from checkout.domain.model.buyer import BuyerInfo

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_DIGITS = re.compile(r"^\d{10,11}$")
_NON_DIGIT = re.compile(r"[^0-9]")

MESSAGES = {
    "full_name": "Please enter your full name",
    "email": "Please enter your email",
    "email_format": "Email address is not valid",
    "phone": "Please enter your phone number",
    "phone_format": "Phone number is not valid",
    "address": "Please enter your address",
    "city": "Please choose a province/city",
    "district": "Please choose a district",
}


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


def normalize_phone(phone: str) -> str:
    """Strip everything but digits: '090-123-4567' -> '0901234567'."""
    return _NON_DIGIT.sub("", phone)


def validate_buyer_info(info: BuyerInfo) -> dict[str, str]:
    errors: dict[str, str] = {}

    if _blank(info.full_name):
        errors["full_name"] = MESSAGES["full_name"]

    if _blank(info.email):
        errors["email"] = MESSAGES["email"]
    elif not EMAIL_PATTERN.fullmatch(info.email):
        errors["email"] = MESSAGES["email_format"]

    if _blank(info.phone):
        errors["phone"] = MESSAGES["phone"]
    elif not PHONE_DIGITS.fullmatch(normalize_phone(info.phone)):
        errors["phone"] = MESSAGES["phone_format"]

    for name in ("address", "city", "district"):
        if _blank(getattr(info, name)):
            errors[name] = MESSAGES[name]

    # ward and note are optional free input
    return errors


def is_submittable(errors: dict[str, str]) -> bool:
    return not errors
