from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

BUREAUS: Tuple[str, ...] = ("transunion", "experian", "equifax")

SECTION_NAMES: Tuple[str, ...] = (
    "scores",
    "personal_info",
    "summary",
    "account_history",
    "public_records",
    "inquiries",
    "creditor_contacts",
)

# Section names accepted from the legacy JSON API.
SECTION_ALIASES: Dict[str, str] = {
    "personalInfo": "personal_info",
    "accountHistory": "account_history",
    "publicRecords": "public_records",
    "creditorContacts": "creditor_contacts",
}

REQUIRED_SECTIONS: Tuple[str, ...] = (
    "credit_scores_3b",
    "personal_information",
    "summary",
)


class AccountHistoryWindow(BaseModel):
    """Pagination window applied after the full account list is extracted."""

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class ExtractionOptions(BaseModel):
    """Per-run request: which sections to read and how to page accounts."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sections: Tuple[str, ...] = ("all",)
    account_history: AccountHistoryWindow = Field(
        default_factory=AccountHistoryWindow, alias="accountHistory"
    )
    include_dashboard: bool = Field(default=False, alias="includeDashboard")

    @field_validator("sections", mode="before")
    @classmethod
    def _normalize_sections(cls, value: Any) -> Tuple[str, ...]:
        if value is None:
            return ("all",)
        if isinstance(value, str):
            value = [value]
        names: List[str] = []
        for raw in value:
            name = SECTION_ALIASES.get(str(raw), str(raw))
            if name != "all" and name not in SECTION_NAMES:
                raise ValueError(f"unknown section: {raw}")
            if name not in names:
                names.append(name)
        return tuple(names)

    def wants(self, section: str) -> bool:
        return "all" in self.sections or section in self.sections

    def requested_sections(self) -> Tuple[str, ...]:
        if "all" in self.sections:
            return SECTION_NAMES
        return tuple(name for name in SECTION_NAMES if name in self.sections)

    @property
    def paginate(self) -> bool:
        return self.account_history.limit is not None


@dataclass(frozen=True)
class AccountHistoryPagination:
    total: int
    limit: int
    offset: int
    has_more: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
        }


@dataclass(frozen=True)
class Account:
    """One tradeline as shown on the 3B report, tripled per bureau."""

    account_name: Optional[str]
    bureaus: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    payment_history: Optional[Dict[str, List[Dict[str, str]]]] = None
    days_late: Optional[Dict[str, Dict[str, Optional[str]]]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"account_name": self.account_name}
        for bureau in BUREAUS:
            out[bureau] = self.bureaus.get(bureau)
        out["payment_history"] = self.payment_history
        out["days_late"] = self.days_late
        return out


@dataclass(frozen=True)
class Report:
    """Normalized 3B report.

    Every section key and ``dashboard_summary`` is always present, ``None``
    when absent. ``account_history_pagination`` appears only for paged runs.
    """

    credit_scores_3b: Optional[Dict[str, Any]]
    personal_information: Optional[Dict[str, Any]]
    summary: Optional[Dict[str, Any]]
    account_history: Optional[List[Account]]
    public_records: Optional[Dict[str, Any]]
    inquiries: Optional[Dict[str, Any]]
    creditor_contacts: Optional[List[Dict[str, Any]]]
    scraped_at: str
    account_history_pagination: Optional[AccountHistoryPagination] = None
    dashboard_summary: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "credit_scores_3b": self.credit_scores_3b,
            "personal_information": self.personal_information,
            "summary": self.summary,
            "account_history": (
                [a.to_dict() for a in self.account_history]
                if self.account_history is not None
                else None
            ),
            "public_records": self.public_records,
            "inquiries": self.inquiries,
            "creditor_contacts": self.creditor_contacts,
            "scraped_at": self.scraped_at,
            "dashboard_summary": self.dashboard_summary,
        }
        if self.account_history_pagination is not None:
            out["account_history_pagination"] = self.account_history_pagination.to_dict()
        return out


@dataclass(frozen=True)
class ReportSize:
    bytes: int
    kb: float
    mb: float


__all__ = [
    "Account",
    "AccountHistoryPagination",
    "AccountHistoryWindow",
    "BUREAUS",
    "ExtractionOptions",
    "REQUIRED_SECTIONS",
    "Report",
    "ReportSize",
    "SECTION_ALIASES",
    "SECTION_NAMES",
]
