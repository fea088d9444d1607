from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

CONTACT_FIELDS = ("name", "email", "message")


def _as_text(value: Any) -> str:
    # Browser-style stringification: lowercase booleans, comma-joined
    # arrays, integral floats without a trailing ".0".
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(_as_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def coerce_text(value: Any) -> str:
    """Trimmed text for a form value; None, False, "", 0 and NaN read as missing."""
    if value is None or value is False or value == "":
        return ""
    if isinstance(value, (int, float)) and (value == 0 or value != value):
        return ""
    return _as_text(value).strip()


def parse_body(body: Any) -> Any:
    """Decode a raw JSON body, leaving undecodable input untouched."""
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return body
    if isinstance(body, str):
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return body
    return body


class ContactSubmission(BaseModel):
    """A single contact form message, trimmed and checked for presence."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    message: str

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def validate_text_fields(cls, value: Any) -> str:
        text = coerce_text(value)
        if not text:
            raise ValueError("must not be empty")
        return text

    @classmethod
    def from_body(cls, body: Any) -> ContactSubmission:
        """Build a submission from a request body of any shape.

        Non-object bodies behave like an object with every field missing,
        so they fail validation the same way.
        """
        data = body if isinstance(body, dict) else {}
        return cls(**{field: data.get(field) for field in CONTACT_FIELDS})

    @property
    def subject(self) -> str:
        return f"New contact form message from {self.name}"

    @property
    def text_body(self) -> str:
        return f"Name: {self.name}\nEmail: {self.email}\n\nMessage:\n{self.message}"
