"""Fixed-column grids: one label column plus one column group per bureau."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from credit3b.core.io.document import DocumentAccessor, Element, nth
from credit3b.core.models.report import BUREAUS
from credit3b.core.models.section_config import GridSectionConfig

from .sections import locate_section

logger = logging.getLogger(__name__)

BureauFields = Dict[str, Dict[str, Optional[str]]]

# label column + three bureaus
_MIN_COLUMNS = 1 + len(BUREAUS)


def map_fields(values: Sequence[str], fields: Iterable[str]) -> Dict[str, Optional[str]]:
    """Zip ``values`` positionally onto ``fields``; missing or empty -> ``None``."""

    out: Dict[str, Optional[str]] = {}
    for idx, name in enumerate(fields):
        value = values[idx] if idx < len(values) else ""
        out[name] = value or None
    return out


def bureau_columns(
    grid: Element, column_selector: str, *, context: str = ""
) -> Optional[List[Element]]:
    columns = grid.query_all(column_selector)
    if len(columns) < _MIN_COLUMNS:
        logger.info("grid_columns_short context=%s found=%d", context, len(columns))
        return None
    return columns


def _grid_columns(
    document: DocumentAccessor, config: GridSectionConfig
) -> Optional[List[Element]]:
    section = locate_section(document, config.locator, section=config.name)
    if section is None:
        return None
    grid = nth(section.query_all(config.grid_selector), config.grid_index)
    if grid is None:
        logger.info("grid_missing section=%s grid_index=%d", config.name, config.grid_index)
        return None
    return bureau_columns(grid, config.column_selector, context=config.name)


def extract_grid_data(
    document: DocumentAccessor, config: GridSectionConfig
) -> Optional[BureauFields]:
    """Read ``config.fields`` for each bureau column of the configured grid.

    The header cell of each bureau column is skipped. Returns ``None`` when
    the section, the grid or its four column groups are not present.
    """

    columns = _grid_columns(document, config)
    if columns is None:
        return None

    result: BureauFields = {}
    for idx, bureau in enumerate(BUREAUS, start=1):
        cells = columns[idx].query_all(config.cell_selector)[1:]
        result[bureau] = map_fields([c.text() for c in cells], config.fields)
    logger.debug("grid_extracted section=%s fields=%d", config.name, len(config.fields))
    return result


def read_grid_cells(
    document: DocumentAccessor, config: GridSectionConfig, names: Iterable[str]
) -> Optional[BureauFields]:
    """Narrow read of the named cells in ``config.cells`` for every bureau.

    Cell positions include the header cell. Unknown names and cells past
    the end of a column read as ``None``.
    """

    columns = _grid_columns(document, config)
    if columns is None:
        return None

    wanted = list(names)
    result: BureauFields = {}
    for idx, bureau in enumerate(BUREAUS, start=1):
        cells = columns[idx].query_all(config.cell_selector)
        values: Dict[str, Optional[str]] = {}
        for name in wanted:
            pos = config.cells.get(name)
            cell = nth(cells, pos) if pos is not None else None
            values[name] = (cell.text() if cell is not None else "") or None
        result[bureau] = values
    return result


__all__ = [
    "BureauFields",
    "bureau_columns",
    "extract_grid_data",
    "map_fields",
    "read_grid_cells",
]
