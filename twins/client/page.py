"""Page-load entry point composing independently togglable features.

A feature is a setup callable taking the :class:`Page` and returning an
optional teardown. Setup owns whatever it acquires (listeners, controllers,
timers) and the teardown releases it; nothing is shared between features.
Critical features run first, deferred ones after them.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from twins.config import settings

logger = logging.getLogger(__name__)

Teardown = Callable[[], None]
Handler = Callable[[], Awaitable[Any]]
Setup = Callable[["Page"], "Teardown | None"]


@dataclass
class Page:
    """A rendered page: elements by id plus a tiny event bus."""

    elements: dict[str, Any] = field(default_factory=dict)
    client: httpx.AsyncClient | None = None
    listeners: dict[str, list[Handler]] = field(default_factory=dict)

    def element(self, element_id: str) -> Any | None:
        return self.elements.get(element_id)

    def listen(self, event: str, handler: Handler) -> Teardown:
        handlers = self.listeners.setdefault(event, [])
        handlers.append(handler)

        def remove() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return remove

    async def dispatch(self, event: str) -> list[Any]:
        return [await handler() for handler in list(self.listeners.get(event, []))]


@dataclass(frozen=True)
class Feature:
    name: str
    setup: Setup
    deferred: bool = False


FEATURES: dict[str, Feature] = {}


def page_feature(name: str, *, deferred: bool = False) -> Callable[[Setup], Setup]:
    """Register ``setup`` under ``name``."""

    def register(setup: Setup) -> Setup:
        FEATURES[name] = Feature(name=name, setup=setup, deferred=deferred)
        return setup

    return register


@dataclass
class PageHandle:
    started: list[str] = field(default_factory=list)
    teardowns: list[Teardown] = field(default_factory=list)

    def teardown(self) -> None:
        while self.teardowns:
            release = self.teardowns.pop()
            try:
                release()
            except Exception:
                logger.exception("Feature teardown failed")


def init_page(page: Page, enabled: Iterable[str] | None = None) -> PageHandle:
    """Run the enabled features against ``page``.

    ``enabled`` defaults to the ``PAGE_FEATURES`` setting.

    Unknown names are logged and skipped. A feature whose setup raises is
    logged and left out; the remaining features still start.
    """
    if enabled is None:
        enabled = settings.page_features
    wanted = list(dict.fromkeys(enabled))
    for name in wanted:
        if name not in FEATURES:
            logger.warning("Unknown page feature %r", name)

    selected = [FEATURES[name] for name in wanted if name in FEATURES]
    ordered = [f for f in selected if not f.deferred] + [
        f for f in selected if f.deferred
    ]

    handle = PageHandle()
    for feature in ordered:
        try:
            release = feature.setup(page)
        except Exception:
            logger.exception("Page feature %s failed to start", feature.name)
            continue
        handle.started.append(feature.name)
        if release is not None:
            handle.teardowns.append(release)
    return handle
