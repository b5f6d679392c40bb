"""Document accessors the extraction pipeline reads from."""

from .document import DocumentAccessor, Element, nth, text_of
from .html_document import HtmlDocument, HtmlElement

__all__ = [
    "DocumentAccessor",
    "Element",
    "HtmlDocument",
    "HtmlElement",
    "nth",
    "text_of",
]
