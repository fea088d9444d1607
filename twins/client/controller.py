"""Contact form submit flow: validate, POST to the relay, report back."""

from __future__ import annotations

import enum
import logging

import httpx

from twins.client.page import Page, Teardown, page_feature
from twins.client.validation import validate_submission
from twins.client.view import FormView
from twins.schemas.contact import CONTACT_FIELDS, coerce_text

logger = logging.getLogger(__name__)

CONTACT_ENDPOINT = "/api/contact"

FIX_FIELDS = "Please fix the highlighted fields."
SENDING = "Sending message..."
SENT = "Message sent! We’ll be in touch soon."
FAILED = (
    "Something went wrong sending your message. Try again or email us directly."
)


class SubmitOutcome(str, enum.Enum):
    INVALID = "invalid"
    SENT = "sent"
    FAILED = "failed"


class ContactFormController:
    """Drives one contact form.

    Holds no per-submission state: every :meth:`submit` reads the view
    afresh, so overlapping submits each send their own request.
    """

    def __init__(
        self,
        view: FormView,
        client: httpx.AsyncClient,
        endpoint: str = CONTACT_ENDPOINT,
    ):
        self.view = view
        self.client = client
        self.endpoint = endpoint

    def set_status(self, message: str, is_error: bool = False) -> None:
        slot = self.view.status_slot()
        if slot is not None:
            slot.set_text(message, is_error)

    def clear_errors(self) -> None:
        for name in CONTACT_FIELDS:
            slot = self.view.error_slot(name)
            if slot is not None:
                slot.set_text("")
        self.set_status("")

    def read_fields(self) -> dict[str, str]:
        return {name: coerce_text(self.view.value(name)) for name in CONTACT_FIELDS}

    def show_errors(self, errors: dict[str, str]) -> None:
        for name, message in errors.items():
            slot = self.view.error_slot(name)
            if slot is not None:
                slot.set_text(message, True)

    async def submit(self) -> SubmitOutcome:
        self.clear_errors()
        fields = self.read_fields()

        errors = validate_submission(**fields)
        if errors:
            self.show_errors(errors)
            self.set_status(FIX_FIELDS, True)
            return SubmitOutcome.INVALID

        self.set_status(SENDING)
        try:
            response = await self.client.post(self.endpoint, json=fields)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Contact request to %s failed", self.endpoint)
            self.set_status(FAILED, True)
            return SubmitOutcome.FAILED
        except Exception:
            # closed client, bad URL: still leave the form resubmittable
            logger.exception("Contact submit to %s raised", self.endpoint)
            self.set_status(FAILED, True)
            return SubmitOutcome.FAILED

        self.set_status(SENT)
        self.view.reset()
        return SubmitOutcome.SENT


CONTACT_FORM_ID = "contact-form"


@page_feature("contact-form")
def setup_contact_form(page: Page) -> Teardown | None:
    """Wire the page's contact form, if it has one, to its submit event."""
    form = page.element(CONTACT_FORM_ID)
    if form is None or page.client is None:
        return None
    controller = ContactFormController(form, page.client)
    return page.listen("submit", controller.submit)
