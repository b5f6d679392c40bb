"""Typed data models for the 3B report pipeline."""

from .report import (
    BUREAUS,
    REQUIRED_SECTIONS,
    SECTION_ALIASES,
    SECTION_NAMES,
    Account,
    AccountHistoryPagination,
    AccountHistoryWindow,
    ExtractionOptions,
    Report,
    ReportSize,
)
from .section_config import (
    SECTION_KINDS,
    AccountListSectionConfig,
    DaysLateConfig,
    FieldSpec,
    GridSectionConfig,
    InteractiveListSectionConfig,
    NarrativeSectionConfig,
    PaymentHistoryConfig,
    RowListSectionConfig,
    ScoreStrategy,
    ScoreTripleSectionConfig,
    SectionConfig,
    SectionConfigSet,
    SectionLocator,
)

__all__ = [
    "Account",
    "AccountHistoryPagination",
    "AccountHistoryWindow",
    "AccountListSectionConfig",
    "BUREAUS",
    "DaysLateConfig",
    "ExtractionOptions",
    "FieldSpec",
    "GridSectionConfig",
    "InteractiveListSectionConfig",
    "NarrativeSectionConfig",
    "PaymentHistoryConfig",
    "REQUIRED_SECTIONS",
    "Report",
    "ReportSize",
    "RowListSectionConfig",
    "SECTION_ALIASES",
    "SECTION_KINDS",
    "SECTION_NAMES",
    "ScoreStrategy",
    "ScoreTripleSectionConfig",
    "SectionConfig",
    "SectionConfigSet",
    "SectionLocator",
]
