"""Locate top-level report sections by heading text or ordinal position."""

from __future__ import annotations

import logging
from typing import Optional

from credit3b.analytics.analytics_tracker import log_degraded_locator
from credit3b.core.io.document import DocumentAccessor, Element, nth
from credit3b.core.models.section_config import SectionLocator

logger = logging.getLogger(__name__)


def heading_matches(text: str, locator: SectionLocator) -> bool:
    if locator.heading is None:
        return False
    if locator.match == "contains":
        return locator.heading in text
    return text.strip() == locator.heading


def locate_section(
    document: DocumentAccessor, locator: SectionLocator, *, section: str = ""
) -> Optional[Element]:
    """Return the section element ``locator`` describes, or ``None``.

    A heading match always wins. When no heading matches, the declared
    ``ordinal`` is used as a degraded-confidence match and logged; a locator
    without an ordinal never falls back.
    """

    candidates = document.query_all(locator.selector)
    if not candidates:
        logger.info("section_candidates_missing section=%s selector=%r", section, locator.selector)
        return None

    if locator.heading is not None:
        for candidate in candidates:
            heading = candidate.query(locator.heading_selector)
            if heading is not None and heading_matches(heading.text(), locator):
                return candidate

        if locator.ordinal is None:
            logger.info(
                "section_heading_not_found section=%s heading=%r candidates=%d",
                section,
                locator.heading,
                len(candidates),
            )
            return None

        fallback = nth(candidates, locator.ordinal)
        if fallback is not None:
            logger.warning(
                "section_locator_degraded section=%s heading=%r ordinal=%d",
                section,
                locator.heading,
                locator.ordinal,
            )
            log_degraded_locator(section)
        return fallback

    if locator.ordinal is None:
        return None
    return nth(candidates, locator.ordinal)


__all__ = ["heading_matches", "locate_section"]
