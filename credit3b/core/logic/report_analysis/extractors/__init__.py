"""Deterministic section extractors for SmartCredit 3B report pages.

Each extractor takes a :class:`~credit3b.core.io.document.DocumentAccessor`
and the section's config and returns raw nested text, ``None`` or ``[]``.
"""

from . import accounts, contacts, dashboard, grid, inquiries, scores, sections

__all__ = [
    "accounts",
    "contacts",
    "dashboard",
    "grid",
    "inquiries",
    "scores",
    "sections",
]
