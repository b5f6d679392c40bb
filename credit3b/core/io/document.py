"""Read-only view of a rendered report page.

The pipeline only ever talks to a :class:`DocumentAccessor`: CSS queries,
trimmed text, class tokens, fire-and-forget activation of a toggle and a
settling pause after activation. Navigation, waits for readiness and retries
belong to whoever hands the accessor in.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Element(Protocol):
    def query(self, selector: str) -> Optional["Element"]:
        ...

    def query_all(self, selector: str) -> List["Element"]:
        ...

    def text(self) -> str:
        """Trimmed text content."""
        ...

    def classes(self) -> List[str]:
        ...


@runtime_checkable
class DocumentAccessor(Protocol):
    settle_delay_ms: int

    def query(self, selector: str) -> Optional[Element]:
        ...

    def query_all(self, selector: str) -> List[Element]:
        ...

    def activate(self, element: Element) -> None:
        """Trigger a UI toggle; completion is not signalled back."""
        ...

    def settle(self) -> None:
        """Pause for ``settle_delay_ms`` after one or more activations."""
        ...


def text_of(scope: Element | DocumentAccessor, selector: str) -> str:
    """Trimmed text of the first ``selector`` match under ``scope`` or ``""``."""

    el = scope.query(selector)
    if el is None:
        return ""
    return el.text()


def nth(items: List[Element], index: int) -> Optional[Element]:
    if 0 <= index < len(items):
        return items[index]
    return None


__all__ = ["DocumentAccessor", "Element", "nth", "text_of"]
