"""Document accessor over a live Playwright page (sync API)."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from playwright.sync_api import ElementHandle, Page
from playwright.sync_api import Error as PlaywrightError

from credit3b.config import get_extraction_settings
from credit3b.core.errors import DOCUMENT_CLOSED, DocumentUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED_MARKERS = ("has been closed", "target closed", "browser has been closed")


class PlaywrightElement:
    def __init__(self, handle: ElementHandle, owner: "PlaywrightDocument") -> None:
        self.handle = handle
        self._owner = owner

    def query(self, selector: str) -> Optional["PlaywrightElement"]:
        found = self._owner._guard(lambda: self.handle.query_selector(selector))
        return self._owner._wrap(found)

    def query_all(self, selector: str) -> List["PlaywrightElement"]:
        found = self._owner._guard(lambda: self.handle.query_selector_all(selector))
        return [PlaywrightElement(h, self._owner) for h in found]

    def text(self) -> str:
        return (self._owner._guard(self.handle.text_content) or "").strip()

    def classes(self) -> List[str]:
        raw = self._owner._guard(lambda: self.handle.get_attribute("class"))
        return (raw or "").split()


class PlaywrightDocument:
    """Wrap ``page`` so extractors never import Playwright themselves.

    A page or browser that has gone away surfaces as
    :class:`DocumentUnavailableError`; any other Playwright error is re-raised
    unchanged for the orchestrator to isolate.
    """

    def __init__(self, page: Page, *, settle_delay_ms: Optional[int] = None) -> None:
        self.page = page
        if settle_delay_ms is None:
            settle_delay_ms = get_extraction_settings().settle_delay_ms
        self.settle_delay_ms = settle_delay_ms

    def _guard(self, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except PlaywrightError as exc:
            msg = str(exc)
            if self.page.is_closed() or any(m in msg.lower() for m in _CLOSED_MARKERS):
                raise DocumentUnavailableError(code=DOCUMENT_CLOSED, message=msg) from exc
            raise

    def _wrap(self, handle: Optional[ElementHandle]) -> Optional[PlaywrightElement]:
        if handle is None:
            return None
        return PlaywrightElement(handle, self)

    def query(self, selector: str) -> Optional[PlaywrightElement]:
        return self._wrap(self._guard(lambda: self.page.query_selector(selector)))

    def query_all(self, selector: str) -> List[PlaywrightElement]:
        found = self._guard(lambda: self.page.query_selector_all(selector))
        return [PlaywrightElement(h, self) for h in found]

    def activate(self, element: PlaywrightElement) -> None:
        # DOM click, so toggles scrolled out of view still fire.
        self._guard(lambda: element.handle.evaluate("el => el.click()"))

    def settle(self) -> None:
        if self.settle_delay_ms > 0:
            logger.debug("settle delay_ms=%s", self.settle_delay_ms)
            self._guard(lambda: self.page.wait_for_timeout(self.settle_delay_ms))


__all__ = ["PlaywrightDocument", "PlaywrightElement"]
