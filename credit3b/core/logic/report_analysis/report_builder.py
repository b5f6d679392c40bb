"""Turn raw extracted sections into the normalized :class:`Report`."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsonschema import Draft7Validator

from credit3b.config import get_extraction_settings
from credit3b.core.config.section_loader import load_section_configs
from credit3b.core.logic.report_analysis import transforms
from credit3b.core.models.report import (
    BUREAUS,
    REQUIRED_SECTIONS,
    Account,
    AccountHistoryPagination,
    ExtractionOptions,
    Report,
    ReportSize,
)
from credit3b.core.models.section_config import (
    AccountListSectionConfig,
    NarrativeSectionConfig,
    SectionConfigSet,
)

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parents[3] / "schemas" / "report.json"
_SCHEMA = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
_VALIDATOR = Draft7Validator(_SCHEMA)

# Placeholders the account grid uses for "no value".
_ACCOUNT_PLACEHOLDERS = {"-", "N/A"}


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _account_text(value: Any) -> Optional[str]:
    cleaned = transforms.clean_text(value)
    if cleaned in _ACCOUNT_PLACEHOLDERS:
        return None
    return cleaned


def _account_fields(
    raw: Optional[Mapping[str, Any]], config: AccountListSectionConfig
) -> Dict[str, Optional[str]]:
    data = raw or {}
    out: Dict[str, Optional[str]] = {}
    for name in config.fields:
        value = data.get(name)
        if name in config.date_fields:
            out[name] = transforms.parse_date(value)
        else:
            out[name] = _account_text(value)
    return out


def build_account(raw: Mapping[str, Any], config: AccountListSectionConfig) -> Account:
    """Normalize one raw account; every bureau carries the full field set."""

    return Account(
        account_name=transforms.clean_text(raw.get("account_name")),
        bureaus={bureau: _account_fields(raw.get(bureau), config) for bureau in BUREAUS},
        payment_history=raw.get("payment_history") or None,
        days_late=raw.get("days_late") or None,
    )


def _accounts(
    raw: Optional[List[Mapping[str, Any]]], config: AccountListSectionConfig
) -> Optional[List[Account]]:
    if raw is None:
        return None
    return [build_account(account, config) for account in raw]


def _bureau_numbers(raw: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    return {bureau: transforms.extract_number(raw.get(bureau)) for bureau in BUREAUS}


def _text_records(
    raw: Optional[List[Mapping[str, Any]]],
) -> Optional[List[Dict[str, Optional[str]]]]:
    if raw is None:
        return None
    return [{k: transforms.clean_text(v) for k, v in record.items()} for record in raw]


def _inquiries(raw: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    return {
        "count": _bureau_numbers(raw.get("count")),
        "details": _text_records(raw.get("details")) or [],
    }


def _pagination(raw: Any) -> Optional[AccountHistoryPagination]:
    if raw is None or isinstance(raw, AccountHistoryPagination):
        return raw
    return AccountHistoryPagination(
        total=int(raw["total"]),
        limit=int(raw["limit"]),
        offset=int(raw["offset"]),
        has_more=bool(raw.get("hasMore", raw.get("has_more"))),
    )


def build_dashboard_summary(
    raw: Optional[Mapping[str, Any]],
    config: NarrativeSectionConfig,
    *,
    scraped_at: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Dashboard score card plus the values parsed out of its sentences."""

    if raw is None:
        return None
    values: Dict[str, Any] = {
        item.name: transforms.get_transform(item.transform)(raw.get(item.name))
        for item in config.fields
    }
    progress = transforms.parse_score_progress(raw.get("progress_text"))
    boost = transforms.parse_score_boost(raw.get("boost_text"))
    values["starting_score"] = progress.starting_score
    values["points_gained"] = progress.points_gained
    if values.get("score_builder_boost") is None:
        values["score_builder_boost"] = transforms.parse_boost_potential(
            raw.get("builder_text")
        )
    values["payment_boost"] = boost.payment_boost
    values["negative_impact"] = boost.negative_impact
    values["score_boost_description"] = transforms.clean_text(raw.get("boost_text"))
    return transforms.build_credit_score_data(values, scraped_at=scraped_at)


def build_report(
    raw_sections: Mapping[str, Any],
    options: Optional[ExtractionOptions] = None,
    *,
    configs: Optional[SectionConfigSet] = None,
    scraped_at: Optional[str] = None,
) -> Report:
    """Apply field transforms to ``raw_sections`` and assemble the report.

    Sections missing from ``raw_sections`` or recorded as ``None`` come out
    as ``None``. Building twice from the same input gives equal reports
    apart from ``scraped_at``.
    """

    options = options or ExtractionOptions()
    configs = configs or load_section_configs()
    scraped_at = scraped_at or _now()

    dashboard_summary = None
    if options.include_dashboard:
        dashboard_summary = build_dashboard_summary(
            raw_sections.get("dashboard"), configs["dashboard"], scraped_at=scraped_at
        )

    raw_scores = raw_sections.get("scores")
    report = Report(
        credit_scores_3b=transforms.parse_3b_scores(raw_scores) if raw_scores else None,
        personal_information=transforms.parse_3b_grid(
            raw_sections.get("personal_info"), configs["personal_info"]
        ),
        summary=transforms.parse_3b_grid(raw_sections.get("summary"), configs["summary"]),
        account_history=_accounts(
            raw_sections.get("account_history"), configs["account_history"]
        ),
        public_records=_bureau_numbers(raw_sections.get("public_records")),
        inquiries=_inquiries(raw_sections.get("inquiries")),
        creditor_contacts=_text_records(raw_sections.get("creditor_contacts")),
        scraped_at=scraped_at,
        account_history_pagination=_pagination(
            raw_sections.get("account_history_pagination")
        ),
        dashboard_summary=dashboard_summary,
    )
    log_report_summary(report)
    return report


def validate_report(report: Report) -> List[str]:
    """Return the foundational sections that are missing (advisory)."""

    data = report.to_dict()
    missing = [name for name in REQUIRED_SECTIONS if not data.get(name)]
    if missing:
        logger.warning("report_missing_sections sections=%s", ",".join(missing))
    return missing


def estimate_size(report: Report) -> ReportSize:
    """UTF-8 size of the report's JSON serialization."""

    size = len(json.dumps(report.to_dict(), ensure_ascii=False).encode("utf-8"))
    result = ReportSize(
        bytes=size,
        kb=round(size / 1024, 2),
        mb=round(size / 1024 / 1024, 2),
    )
    limit_mb = get_extraction_settings().size_warn_mb
    if size > limit_mb * 1024 * 1024:
        logger.warning("report_size_large mb=%.2f limit_mb=%.2f", result.mb, limit_mb)
    return result


def check_report_schema(
    report: Report, *, configs: Optional[SectionConfigSet] = None
) -> List[str]:
    """Validate ``report`` against ``schemas/report.json`` (advisory).

    Also checks that every bureau of every account carries exactly the
    configured account field set.
    """

    configs = configs or load_section_configs()
    data = report.to_dict()
    errors = [
        f"{'/'.join(str(p) for p in err.path) or '<root>'}: {err.message}"
        for err in _VALIDATOR.iter_errors(data)
    ]

    expected = set(configs["account_history"].field_names)
    for idx, account in enumerate(data.get("account_history") or []):
        for bureau in BUREAUS:
            keys = set(account.get(bureau) or {})
            if keys != expected:
                errors.append(
                    f"account_history/{idx}/{bureau}: field set differs from configured fields"
                )

    if errors:
        logger.warning("report_schema_errors count=%d first=%s", len(errors), errors[0])
    return errors


def log_report_summary(report: Report) -> None:
    data = report.to_dict()
    present = {
        name: data.get(name) is not None
        for name in (
            "credit_scores_3b",
            "personal_information",
            "summary",
            "account_history",
            "public_records",
            "inquiries",
            "creditor_contacts",
            "dashboard_summary",
        )
    }
    logger.info(
        "report_summary %s accounts=%d pagination=%s",
        " ".join(f"{k}={'yes' if v else 'no'}" for k, v in present.items()),
        len(report.account_history or []),
        (
            report.account_history_pagination.to_dict()
            if report.account_history_pagination is not None
            else None
        ),
    )


__all__ = [
    "build_account",
    "build_dashboard_summary",
    "build_report",
    "check_report_schema",
    "estimate_size",
    "log_report_summary",
    "validate_report",
]
