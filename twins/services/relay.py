"""Contact relay: validate a submission and forward it as an email.

Framework-neutral so the FastAPI route and the Lambda adapter share one code
path. Each call is independent; identical submissions are sent twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from twins.config import Settings, settings
from twins.schemas.contact import ContactSubmission, parse_body
from twins.services.mailer import Mailer, OutboundEmail, mailer

logger = logging.getLogger(__name__)

ALLOWED_METHOD = "POST"

METHOD_NOT_ALLOWED = "Method not allowed"
MISSING_FIELDS = "Missing required fields."
SEND_FAILED = "Error sending email."


@dataclass
class RelayResponse:
    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    # sent, invalid, failed, method_not_allowed
    outcome: str = "sent"


class ContactRelay:
    def __init__(
        self,
        mail: Mailer | None = None,
        sender: str | None = None,
        recipients: list[str] | None = None,
        config: Settings | None = None,
    ):
        config = config or settings
        self.mailer = mail if mail is not None else mailer
        self.sender = sender or config.email_sender
        self.recipients = list(recipients or config.contact_recipients)

    def build_email(self, submission: ContactSubmission) -> OutboundEmail:
        return OutboundEmail(
            sender=self.sender,
            to=self.recipients,
            subject=submission.subject,
            text=submission.text_body,
            reply_to=submission.email,
        )

    def handle(self, method: str, body: Any) -> RelayResponse:
        if method.upper() != ALLOWED_METHOD:
            return RelayResponse(
                405,
                {"error": METHOD_NOT_ALLOWED},
                headers={"Allow": ALLOWED_METHOD},
                outcome="method_not_allowed",
            )

        try:
            submission = ContactSubmission.from_body(parse_body(body))
        except ValidationError as exc:
            missing = sorted({str(err["loc"][0]) for err in exc.errors()})
            logger.info("Rejected contact submission", extra={"missing": missing})
            return RelayResponse(400, {"error": MISSING_FIELDS}, outcome="invalid")

        try:
            self.mailer.send(self.build_email(submission))
        except Exception:
            # provider and transport errors alike end the request here
            logger.exception("Error sending contact email")
            return RelayResponse(500, {"error": SEND_FAILED}, outcome="failed")

        return RelayResponse(200, {"ok": True})


relay = ContactRelay()
