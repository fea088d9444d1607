"""What the contact form controller needs from a rendered page.

The browser DOM is one implementation; :class:`MemoryForm` is another, used by
the terminal tool and the tests. Slots that a page does not render are
reported as ``None`` and the controller simply skips them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from twins.schemas.contact import CONTACT_FIELDS


class TextSlot(Protocol):
    def set_text(self, text: str, is_error: bool = False) -> None: ...


class FormView(Protocol):
    def value(self, name: str) -> Any: ...

    def error_slot(self, name: str) -> TextSlot | None: ...

    def status_slot(self) -> TextSlot | None: ...

    def reset(self) -> None: ...


@dataclass
class TextBox:
    text: str = ""
    is_error: bool = False

    def set_text(self, text: str, is_error: bool = False) -> None:
        self.text = text or ""
        self.is_error = is_error


@dataclass
class MemoryForm:
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, TextBox] = field(
        default_factory=lambda: {name: TextBox() for name in CONTACT_FIELDS}
    )
    status: TextBox | None = field(default_factory=TextBox)

    def value(self, name: str) -> Any:
        return self.values.get(name)

    def error_slot(self, name: str) -> TextBox | None:
        return self.errors.get(name)

    def status_slot(self) -> TextBox | None:
        return self.status

    def reset(self) -> None:
        self.values = {name: "" for name in self.values}

    def error_text(self, name: str) -> str:
        slot = self.errors.get(name)
        return slot.text if slot else ""
