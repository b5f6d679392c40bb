"""Dashboard score card: headline numbers plus the sentences that explain them."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from credit3b.core.io.document import DocumentAccessor, text_of
from credit3b.core.models.section_config import NarrativeSectionConfig

logger = logging.getLogger(__name__)

_PROGRESS_RE = re.compile(r"starting score was", re.I)
_BOOST_RE = re.compile(r"decrease.*?-\d+\s+pts", re.I)
_POTENTIAL_RE = re.compile(r"\+\d+\s+pts", re.I)

NARRATIVE_KEYS = ("progress_text", "builder_text", "boost_text")


def _classify(text: str) -> Optional[str]:
    if _PROGRESS_RE.search(text):
        return "progress_text"
    # ScoreBoost sentences are the only ones quoting a decrease.
    if _BOOST_RE.search(text):
        return "boost_text"
    if _POTENTIAL_RE.search(text):
        return "builder_text"
    return None


def extract_dashboard(
    document: DocumentAccessor, config: NarrativeSectionConfig
) -> Optional[Dict[str, Optional[str]]]:
    """Raw dashboard values keyed by field name plus the narrative sentences.

    Only the first sentence of each kind is kept. ``None`` when the page
    carries none of the configured fields and no recognisable sentence.
    """

    raw: Dict[str, Optional[str]] = {
        item.name: (text_of(document, item.selector) if item.selector else "") or None
        for item in config.fields
    }
    narrative: Dict[str, Optional[str]] = {key: None for key in NARRATIVE_KEYS}
    for el in document.query_all(config.text_selector):
        text = el.text()
        key = _classify(text) if text else None
        if key is not None and narrative[key] is None:
            narrative[key] = text

    if not any(raw.values()) and not any(narrative.values()):
        logger.info("dashboard_not_found")
        return None
    raw.update(narrative)
    return raw


__all__ = ["NARRATIVE_KEYS", "extract_dashboard"]
