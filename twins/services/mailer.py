"""Outbound email delivery.

Two transports are supported: the Resend HTTP API (default) and plain SMTP.
Every transport failure is raised as :class:`EmailDeliveryError` so callers
handle one exception type regardless of backend.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage

import httpx

from twins.config import Settings, settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the provider could not accept a message."""


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: list[str]
    subject: str
    text: str
    reply_to: str | None = None

    def to_resend(self) -> dict:
        payload: dict = {
            "from": self.sender,
            "to": list(self.to),
            "subject": self.subject,
            "text": self.text,
        }
        if self.reply_to:
            payload["reply_to"] = self.reply_to
        return payload

    def to_mime(self) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = ", ".join(self.to)
        if self.reply_to:
            msg["Reply-To"] = self.reply_to
        msg["Subject"] = self.subject
        msg.set_content(self.text)
        return msg


class Mailer:
    def __init__(
        self,
        config: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        config = config or settings
        self.enabled = config.email_enabled
        self.backend = config.email_backend
        self.api_key = config.resend_api_key
        self.api_url = config.resend_api_url
        self.timeout = config.email_timeout_seconds
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.user = config.smtp_user
        self.passwd = config.smtp_pass
        self.use_ssl = config.smtp_ssl
        self.use_starttls = config.smtp_starttls
        # Tests inject an httpx.MockTransport here.
        self._transport = transport

    def send(self, email: OutboundEmail) -> str | None:
        """Deliver ``email`` and return the provider message id, if any."""
        if not self.enabled:
            logger.info(
                "Email disabled; dropping message",
                extra={"subject": email.subject, "recipients": len(email.to)},
            )
            return None

        if self.backend == "smtp":
            self._send_smtp(email)
            return None
        return self._send_resend(email)

    def _send_resend(self, email: OutboundEmail) -> str | None:
        if not self.api_key:
            raise EmailDeliveryError("RESEND_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            with httpx.Client(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = client.post(
                    self.api_url, json=email.to_resend(), headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise EmailDeliveryError(
                f"Resend rejected message: HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise EmailDeliveryError(f"Resend request failed: {exc}") from exc

        message_id = data.get("id") if isinstance(data, dict) else None
        logger.info("Email accepted by Resend", extra={"message_id": message_id})
        return message_id

    def _send_smtp(self, email: OutboundEmail) -> None:
        if not self.host:
            raise EmailDeliveryError("SMTP_HOST is not configured")

        msg = email.to_mime()
        try:
            if self.use_ssl:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self.host, self.port, context=context, timeout=self.timeout
                ) as smtp:
                    if self.user:
                        smtp.login(self.user, self.passwd or "")
                    smtp.send_message(msg)
                return

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_starttls:
                    context = ssl.create_default_context()
                    smtp.starttls(context=context)
                if self.user:
                    smtp.login(self.user, self.passwd or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(f"SMTP delivery failed: {exc}") from exc


mailer = Mailer()
