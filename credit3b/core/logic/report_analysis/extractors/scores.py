"""The three bureau scores, tried against each known page layout in turn."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from credit3b.core.io.document import DocumentAccessor, Element
from credit3b.core.models.report import BUREAUS
from credit3b.core.models.section_config import ScoreStrategy, ScoreTripleSectionConfig

logger = logging.getLogger(__name__)


def _candidates(document: DocumentAccessor, strategy: ScoreStrategy) -> List[Element]:
    if strategy.scope:
        scope = document.query(strategy.scope)
        if scope is None:
            return []
        elements = scope.query_all(strategy.selector)
    else:
        elements = document.query_all(strategy.selector)
    if strategy.pattern:
        pattern = re.compile(strategy.pattern)
        elements = [el for el in elements if pattern.search(el.text())]
    return elements


def extract_scores(
    document: DocumentAccessor, config: ScoreTripleSectionConfig
) -> Optional[Dict[str, Optional[str]]]:
    """Return raw score texts in bureau order.

    The first strategy yielding at least three elements wins. ``None`` when
    no strategy does.
    """

    for idx, strategy in enumerate(config.strategies):
        elements = _candidates(document, strategy)
        if len(elements) >= len(BUREAUS):
            logger.debug("scores_strategy_matched strategy=%d selector=%r", idx, strategy.selector)
            return {
                bureau: elements[pos].text() or None for pos, bureau in enumerate(BUREAUS)
            }
    logger.warning("scores_not_found strategies=%d", len(config.strategies))
    return None


__all__ = ["extract_scores"]
