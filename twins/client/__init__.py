"""Contact form flow as seen from the page."""

from twins.client.controller import (  # noqa: F401
    ContactFormController,
    SubmitOutcome,
    setup_contact_form,
)
from twins.client.page import FEATURES, Page, PageHandle, init_page  # noqa: F401
from twins.client.view import FormView, MemoryForm, TextBox  # noqa: F401

__all__ = [
    "ContactFormController",
    "FEATURES",
    "FormView",
    "MemoryForm",
    "Page",
    "PageHandle",
    "SubmitOutcome",
    "TextBox",
    "init_page",
    "setup_contact_form",
]
