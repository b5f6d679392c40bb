"""Document accessor over saved HTML (report snapshots, fixtures)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag


class HtmlElement:
    def __init__(self, tag: Tag) -> None:
        self.tag = tag

    def query(self, selector: str) -> Optional["HtmlElement"]:
        found = self.tag.select_one(selector)
        return HtmlElement(found) if found is not None else None

    def query_all(self, selector: str) -> List["HtmlElement"]:
        return [HtmlElement(t) for t in self.tag.select(selector)]

    def text(self) -> str:
        return self.tag.get_text().strip()

    def classes(self) -> List[str]:
        raw = self.tag.get("class") or []
        if isinstance(raw, str):
            return raw.split()
        return list(raw)


class HtmlDocument:
    """Static snapshot of a report page.

    Content that a live page would reveal on activation must already be in
    the snapshot; activations are only recorded.
    """

    def __init__(self, html: str, *, parser: str = "html.parser") -> None:
        self.soup = BeautifulSoup(html, parser)
        self.settle_delay_ms = 0
        self.activated: List[HtmlElement] = []
        self.settle_calls = 0

    @classmethod
    def from_path(cls, path: Path | str, **kwargs) -> "HtmlDocument":
        return cls(Path(path).read_text(encoding="utf-8"), **kwargs)

    def query(self, selector: str) -> Optional[HtmlElement]:
        found = self.soup.select_one(selector)
        return HtmlElement(found) if found is not None else None

    def query_all(self, selector: str) -> List[HtmlElement]:
        return [HtmlElement(t) for t in self.soup.select(selector)]

    def activate(self, element: HtmlElement) -> None:
        self.activated.append(element)

    def settle(self) -> None:
        self.settle_calls += 1


__all__ = ["HtmlDocument", "HtmlElement"]
