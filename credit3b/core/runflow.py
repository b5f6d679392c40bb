from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from credit3b.analytics.analytics_tracker import emit_counter, set_metric
from credit3b.core.config.section_loader import load_section_configs
from credit3b.core.io.document import DocumentAccessor
from credit3b.core.logic.report_analysis.orchestrator import extract_all
from credit3b.core.logic.report_analysis.report_builder import (
    build_report,
    check_report_schema,
    estimate_size,
    validate_report,
)
from credit3b.core.models.report import ExtractionOptions, Report, ReportSize
from credit3b.core.models.section_config import SectionConfigSet

log = logging.getLogger(__name__)

_CORE_KEYS: Tuple[str, ...] = (
    "credit_scores_3b",
    "personal_information",
    "summary",
    "account_history",
    "public_records",
    "inquiries",
    "creditor_contacts",
)


@dataclass(frozen=True)
class ExtractionRun:
    """Outcome of one extraction: the report plus its advisory checks."""

    report: Report
    missing: Tuple[str, ...] = ()
    schema_errors: Tuple[str, ...] = ()
    size: Optional[ReportSize] = None
    null_sections: Tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing and not self.schema_errors


def _null_sections(report: Report) -> List[str]:
    data = report.to_dict()
    return [key for key in _CORE_KEYS if data.get(key) is None]


def run_extraction(
    document: DocumentAccessor,
    options: Optional[ExtractionOptions] = None,
    *,
    configs: Optional[SectionConfigSet] = None,
) -> ExtractionRun:
    """Extract, build and check a report from ``document``.

    Only run-level faults such as
    :class:`~credit3b.core.errors.DocumentUnavailableError` propagate.
    """

    options = options or ExtractionOptions()
    configs = configs or load_section_configs()

    started = time.perf_counter()
    raw = extract_all(document, options, configs=configs)
    report = build_report(raw, options, configs=configs)
    missing = validate_report(report)
    schema_errors = check_report_schema(report, configs=configs)
    size = estimate_size(report)
    elapsed_ms = (time.perf_counter() - started) * 1000

    emit_counter("extraction.runs")
    set_metric("extraction.last_run_ms", elapsed_ms)
    set_metric("extraction.last_report_bytes", size.bytes)

    run = ExtractionRun(
        report=report,
        missing=tuple(missing),
        schema_errors=tuple(schema_errors),
        size=size,
        null_sections=tuple(_null_sections(report)),
    )
    log.info(
        "extraction_run_done elapsed_ms=%.0f missing=%s schema_errors=%d size_kb=%.2f",
        elapsed_ms,
        ",".join(run.missing) or "-",
        len(run.schema_errors),
        size.kb,
    )
    return run


__all__ = ["ExtractionRun", "run_extraction"]
