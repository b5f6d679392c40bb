"""Inquiries detail rows: creditor, date and bureau per row."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from credit3b.core.errors import DocumentUnavailableError
from credit3b.core.io.document import DocumentAccessor
from credit3b.core.models.section_config import RowListSectionConfig

from .sections import locate_section

logger = logging.getLogger(__name__)


def extract_inquiry_details(
    document: DocumentAccessor, config: RowListSectionConfig
) -> List[Dict[str, Optional[str]]]:
    """Return one record per data row of the Inquiries section.

    Rows with fewer than ``min_cells`` cells are ignored and rows missing
    ``required_field`` (the creditor name) are dropped.
    """

    section = locate_section(document, config.locator, section=config.name)
    if section is None:
        return []

    rows = section.query_all(config.row_selector)
    records: List[Dict[str, Optional[str]]] = []
    for idx, row in enumerate(rows, start=1):
        try:
            cells = row.query_all(config.cell_selector)
            if len(cells) < config.min_cells:
                continue
            record = {
                name: (cells[pos].text() if pos < len(cells) else "") or None
                for pos, name in enumerate(config.fields)
            }
        except DocumentUnavailableError:
            raise
        except Exception:
            logger.warning("inquiry_row_failed row=%d", idx, exc_info=True)
            continue
        if config.required_field and not record.get(config.required_field):
            continue
        records.append(record)

    logger.info("inquiries_extracted rows=%d kept=%d", len(rows), len(records))
    return records


__all__ = ["extract_inquiry_details"]
