"""Client-side checks run before a contact message leaves the page."""

from __future__ import annotations

import re

# Permissive on purpose: something@something.something with no whitespace.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_REQUIRED = "Please add your name."
EMAIL_REQUIRED = "Email is required."
EMAIL_INVALID = "Enter a valid email."
MESSAGE_REQUIRED = "Tell us a bit about what you need."


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def validate_submission(name: str, email: str, message: str) -> dict[str, str]:
    """Return field name -> error message for every failing rule.

    Inputs are expected to be trimmed already. An empty dict means the
    submission may be sent.
    """
    errors: dict[str, str] = {}
    if not name:
        errors["name"] = NAME_REQUIRED
    if not email:
        errors["email"] = EMAIL_REQUIRED
    elif not is_valid_email(email):
        errors["email"] = EMAIL_INVALID
    if not message:
        errors["message"] = MESSAGE_REQUIRED
    return errors
