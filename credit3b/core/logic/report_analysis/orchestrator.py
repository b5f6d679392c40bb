from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from credit3b.analytics.analytics_tracker import log_section_outcome
from credit3b.core.config.section_loader import load_section_configs
from credit3b.core.errors import DocumentUnavailableError
from credit3b.core.io.document import DocumentAccessor
from credit3b.core.logic.report_analysis.extractors import (
    accounts,
    contacts,
    dashboard,
    grid,
    inquiries,
    scores,
    sections,
)
from credit3b.core.models.report import ExtractionOptions
from credit3b.core.models.section_config import SectionConfigSet

log = logging.getLogger(__name__)

RawSections = Dict[str, Any]
SectionHandler = Callable[[DocumentAccessor, SectionConfigSet, ExtractionOptions], Any]

SUMMARY_COUNTERS = ("total_accounts", "open_accounts", "closed_accounts")

# Sections recorded as [] rather than None when their extraction raises.
_LIST_SECTIONS = frozenset({"account_history", "creditor_contacts"})


def _failure_value(section: str) -> Any:
    return [] if section in _LIST_SECTIONS else None


def _is_empty(value: Any) -> bool:
    return value is None or value == [] or value == {}


def _run_section(section: str, fn: Callable[[], Any]) -> Any:
    """Run one section read in isolation.

    Anything except :class:`DocumentUnavailableError` is logged with its
    traceback and turned into the section's failure value.
    """

    try:
        value = fn()
    except DocumentUnavailableError:
        raise
    except Exception:
        log.exception("section_extract_failed section=%s", section)
        log_section_outcome(section, "failed")
        return _failure_value(section)
    log_section_outcome(section, "empty" if _is_empty(value) else "ok")
    return value


# Section handlers -------------------------------------------------------------


def _scores(document, configs, options):
    return scores.extract_scores(document, configs["scores"])


def _personal_info(document, configs, options):
    return grid.extract_grid_data(document, configs["personal_info"])


def _summary(document, configs, options):
    config = configs["summary"]
    summary = grid.extract_grid_data(document, config)
    if summary is None:
        return None
    try:
        counters = grid.read_grid_cells(document, config, SUMMARY_COUNTERS)
    except DocumentUnavailableError:
        raise
    except Exception:
        log.warning("summary_counters_failed", exc_info=True)
        counters = None
    if counters:
        for bureau, values in counters.items():
            merged = dict(summary.get(bureau) or {})
            merged.update(values)
            summary[bureau] = merged
    return summary


def _public_records(document, configs, options):
    counts = grid.read_grid_cells(document, configs["summary"], ("public_records",))
    if counts is None:
        return None
    return {bureau: values["public_records"] for bureau, values in counts.items()}


def _inquiries(document, configs, options):
    try:
        counts = grid.read_grid_cells(document, configs["summary"], ("inquiries_2years",))
    except DocumentUnavailableError:
        raise
    except Exception:
        log.warning("inquiry_count_failed", exc_info=True)
        counts = None
    details = inquiries.extract_inquiry_details(document, configs["inquiries"])
    return {
        "count": (
            {bureau: values["inquiries_2years"] for bureau, values in counts.items()}
            if counts is not None
            else None
        ),
        "details": details or [],
    }


def _account_history(document, configs, options):
    return accounts.extract_account_history(document, configs["account_history"])


def _creditor_contacts(document, configs, options):
    return contacts.extract_creditor_contacts(document, configs["creditor_contacts"])


def _dashboard(document, configs, options):
    return dashboard.extract_dashboard(document, configs["dashboard"])


_SECTION_HANDLERS: Dict[str, SectionHandler] = {
    "scores": _scores,
    "personal_info": _personal_info,
    "summary": _summary,
    "account_history": _account_history,
    "public_records": _public_records,
    "inquiries": _inquiries,
    "creditor_contacts": _creditor_contacts,
}


def extract_all(
    document: DocumentAccessor,
    options: Optional[ExtractionOptions] = None,
    *,
    configs: Optional[SectionConfigSet] = None,
) -> RawSections:
    """Read every requested section of ``document`` into raw nested text.

    Parameters
    ----------
    document:
        Accessor over a page already showing the 3B report.
    options:
        Requested sections, account pagination window and dashboard flag.
        Defaults to every section without pagination.
    configs:
        Section configs; defaults to the shared loaded set.

    Returns
    -------
    dict
        One key per requested section; a failed or absent section is
        ``None`` (``[]`` for account history and creditor contacts). Adds
        ``account_history_pagination`` when a limit was requested and
        ``dashboard`` when the dashboard was requested.

    Raises
    ------
    DocumentUnavailableError
        When the document can no longer be read.
    """

    options = options or ExtractionOptions()
    configs = configs or load_section_configs()

    raw: RawSections = {}
    for section in options.requested_sections():
        handler = _SECTION_HANDLERS[section]
        raw[section] = _run_section(
            section, lambda h=handler: h(document, configs, options)
        )

    if "account_history" in raw and options.paginate:
        window = options.account_history
        page, pagination = accounts.paginate_accounts(
            raw["account_history"] or [],
            limit=window.limit,
            offset=window.offset,
        )
        raw["account_history"] = page
        raw["account_history_pagination"] = pagination

    if options.include_dashboard:
        raw["dashboard"] = _run_section(
            "dashboard", lambda: _dashboard(document, configs, options)
        )

    log.info(
        "extract_all_done sections=%s",
        ",".join(f"{k}={'ok' if not _is_empty(v) else 'none'}" for k, v in raw.items()),
    )
    return raw


def check_available_sections(
    document: DocumentAccessor, configs: Optional[SectionConfigSet] = None
) -> Dict[str, Any]:
    """Report which sections' preconditions hold on ``document`` (diagnostics)."""

    configs = configs or load_section_configs()

    probes = {
        "personal_info": configs["personal_info"].grid_selector,
        "summary": configs["summary"].grid_selector,
        "account_history": configs["account_history"].container_selector,
        "inquiries": configs["inquiries"].row_selector,
    }
    availability: Dict[str, Any] = {}
    for name, probe in probes.items():
        section = sections.locate_section(document, configs[name].locator, section=name)
        availability[name] = section is not None and bool(section.query_all(probe))
    availability["scores"] = scores.extract_scores(document, configs["scores"]) is not None
    contact_config = configs["creditor_contacts"]
    availability["creditor_contacts"] = bool(
        document.query_all(contact_config.container_selector)
    ) or contacts.has_reveal_toggles(document, contact_config)
    availability["sections"] = len(document.query_all(configs["summary"].locator.selector))

    log.info("available_sections %s", availability)
    return availability


__all__ = [
    "RawSections",
    "SUMMARY_COUNTERS",
    "check_available_sections",
    "extract_all",
]
