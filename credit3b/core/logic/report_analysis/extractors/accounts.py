"""Account History: repeated account blocks with nested per-bureau tables."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from credit3b.config import get_extraction_settings
from credit3b.core.errors import DocumentUnavailableError
from credit3b.core.io.document import DocumentAccessor, Element, text_of
from credit3b.core.models.report import BUREAUS, AccountHistoryPagination
from credit3b.core.models.section_config import (
    AccountListSectionConfig,
    DaysLateConfig,
    PaymentHistoryConfig,
)

from .grid import bureau_columns, map_fields
from .sections import locate_section

logger = logging.getLogger(__name__)

T = TypeVar("T")

RawAccount = Dict[str, Any]


def _status_class(classes: List[str], prefix: str) -> str:
    for token in classes:
        if token.startswith(prefix):
            return token[len(prefix):] or "unknown"
    return "unknown"


def _month_entries(block: Element, cfg: PaymentHistoryConfig) -> List[Dict[str, str]]:
    months = block.query(cfg.month_container_selector)
    if months is None:
        return []
    return [
        {
            "month": text_of(month, cfg.label_selector),
            "status": text_of(month, cfg.badge_selector),
            "status_class": _status_class(month.classes(), cfg.status_prefix),
        }
        for month in months.query_all(cfg.month_selector)
    ]


def extract_payment_history(
    container: Element, cfg: PaymentHistoryConfig
) -> Optional[Dict[str, List[Dict[str, str]]]]:
    """Two-year payment calendar per bureau, ``None`` without three bureau blocks."""

    history = container.query(cfg.container_selector)
    if history is None:
        return None
    blocks = history.query_all(cfg.bureau_selector)
    if len(blocks) < cfg.min_bureaus:
        return None
    return {bureau: _month_entries(blocks[idx], cfg) for idx, bureau in enumerate(BUREAUS)}


def _days_late_section(container: Element, cfg: DaysLateConfig) -> Optional[Element]:
    for candidate in container.query_all(cfg.candidate_selector):
        heading = candidate.query(cfg.heading_selector)
        if heading is not None and cfg.heading_text in heading.text():
            return candidate
    return None


def _bureau_days_late(column: Element, cfg: DaysLateConfig) -> Dict[str, Optional[str]]:
    values_grid = column.query(cfg.values_selector)
    if values_grid is None:
        return {bucket: None for bucket in cfg.buckets}
    values = values_grid.query_all(cfg.value_selector)
    out: Dict[str, Optional[str]] = {}
    for idx, bucket in enumerate(cfg.buckets):
        text = values[idx].text() if idx < len(values) else ""
        # A blank bucket reads as the configured count, not as unknown.
        out[bucket] = text or cfg.missing_value
    return out


def extract_days_late(
    container: Element, cfg: DaysLateConfig
) -> Optional[Dict[str, Dict[str, Optional[str]]]]:
    """30/60/90 day late counts per bureau from the 7 year history table."""

    section = _days_late_section(container, cfg)
    if section is None:
        return None
    grid = section.query(cfg.grid_selector)
    if grid is None:
        return None
    columns = grid.query_all(cfg.bureau_selector)
    if len(columns) < cfg.min_bureaus:
        return None
    return {bureau: _bureau_days_late(columns[idx], cfg) for idx, bureau in enumerate(BUREAUS)}


def _optional_part(
    label: str, account_name: str, fn: Callable[..., Optional[T]], *args: Any
) -> Optional[T]:
    try:
        return fn(*args)
    except DocumentUnavailableError:
        raise
    except Exception:
        logger.warning(
            "account_part_failed part=%s account=%r", label, account_name, exc_info=True
        )
        return None


def _extract_account(
    container: Element, config: AccountListSectionConfig, position: int
) -> Optional[RawAccount]:
    name = text_of(container, config.name_selector) or f"Unknown Account {position}"

    grid = container.query(config.grid_selector)
    if grid is None:
        logger.info("account_grid_missing account=%r", name)
        return None
    columns = bureau_columns(grid, config.column_selector, context=name)
    if columns is None:
        logger.info("account_grid_incomplete account=%r", name)
        return None

    account: RawAccount = {"account_name": name}
    for idx, bureau in enumerate(BUREAUS, start=1):
        cells = columns[idx].query_all(config.cell_selector)[1:]
        account[bureau] = map_fields([c.text() for c in cells], config.fields)

    account["payment_history"] = _optional_part(
        "payment_history", name, extract_payment_history, container, config.payment_history
    )
    account["days_late"] = _optional_part(
        "days_late", name, extract_days_late, container, config.days_late
    )
    return account


def extract_account_history(
    document: DocumentAccessor, config: AccountListSectionConfig
) -> List[RawAccount]:
    """Extract every account block inside the Account History section.

    Containers are only searched within the located section; similar blocks
    elsewhere on the page are ignored. Each account is read independently.
    """

    section = locate_section(document, config.locator, section=config.name)
    if section is None:
        logger.warning("account_history_section_missing")
        return []

    containers = section.query_all(config.container_selector)
    if not containers:
        logger.warning("account_containers_missing")
        return []

    accounts: List[RawAccount] = []
    for position, container in enumerate(containers, start=1):
        try:
            account = _extract_account(container, config, position)
        except DocumentUnavailableError:
            raise
        except Exception:
            logger.exception("account_extract_failed position=%d", position)
            continue
        if account is not None:
            accounts.append(account)

    logger.info("account_history_extracted accounts=%d containers=%d", len(accounts), len(containers))
    return accounts


def paginate_accounts(
    accounts: List[RawAccount], *, limit: Optional[int] = None, offset: int = 0
) -> Tuple[List[RawAccount], AccountHistoryPagination]:
    """Slice a fully extracted account list to ``[offset, offset + limit)``.

    ``limit`` defaults to ``CREDIT3B_DEFAULT_PAGE_LIMIT``.
    """

    if limit is None:
        limit = get_extraction_settings().default_page_limit
    total = len(accounts)
    page = accounts[offset:offset + limit]
    pagination = AccountHistoryPagination(
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + limit < total,
    )
    logger.info("account_history_page returned=%d total=%d", len(page), total)
    return page, pagination


__all__ = [
    "RawAccount",
    "extract_account_history",
    "extract_days_late",
    "extract_payment_history",
    "paginate_accounts",
]
