"""Declarative description of where each report section lives and its shape.

One frozen dataclass per shape kind; :data:`SECTION_KINDS` maps the ``kind``
tag used in ``sections.yaml`` to the class that reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

HEADING_MATCH_MODES = ("exact", "contains")


def _frozen_map(data: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


def _str_tuple(data: Any) -> Tuple[str, ...]:
    return tuple(str(v) for v in (data or ()))


@dataclass(frozen=True)
class SectionLocator:
    """How to find a top-level report section.

    ``heading`` is the preferred match. ``ordinal`` is the position among
    ``selector`` matches; it is the primary strategy when no heading is
    declared and an explicit, logged fallback otherwise.
    """

    selector: str = "section.mt-5"
    heading: Optional[str] = None
    heading_selector: str = "h5"
    match: str = "exact"
    ordinal: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SectionLocator":
        data = data or {}
        return cls(
            selector=data.get("selector", cls.selector),
            heading=data.get("heading"),
            heading_selector=data.get("heading_selector", cls.heading_selector),
            match=data.get("match", cls.match),
            ordinal=data.get("ordinal"),
        )


@dataclass(frozen=True)
class FieldSpec:
    """A named sub-field; without ``selector`` it is read positionally."""

    name: str
    selector: Optional[str] = None
    transform: str = "clean_text"

    @classmethod
    def from_value(cls, value: Any) -> "FieldSpec":
        if isinstance(value, str):
            return cls(name=value)
        return cls(
            name=value["name"],
            selector=value.get("selector"),
            transform=value.get("transform", "clean_text"),
        )


@dataclass(frozen=True)
class SectionConfig:
    kind: ClassVar[str] = ""

    name: str
    locator: SectionLocator = field(default_factory=SectionLocator)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class GridSectionConfig(SectionConfig):
    """Label column plus one column group per bureau."""

    kind: ClassVar[str] = "grid"

    grid_selector: str = "div.d-grid.grid-cols-4"
    grid_index: int = 0
    column_selector: str = "div.d-contents"
    cell_selector: str = "p.grid-cell"
    fields: Tuple[str, ...] = ()
    default_transform: str = "clean_text"
    transforms: Mapping[str, str] = field(default_factory=lambda: _frozen_map(None))
    # Named single cells for narrow reads; 0-based, header cell included.
    cells: Mapping[str, int] = field(default_factory=lambda: _frozen_map(None))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return self.fields

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "GridSectionConfig":
        return cls(
            name=name,
            locator=SectionLocator.from_dict(data.get("locator")),
            grid_selector=data.get("grid_selector", cls.grid_selector),
            grid_index=int(data.get("grid_index", 0)),
            column_selector=data.get("column_selector", cls.column_selector),
            cell_selector=data.get("cell_selector", cls.cell_selector),
            fields=_str_tuple(data.get("fields")),
            default_transform=data.get("default_transform", cls.default_transform),
            transforms=_frozen_map(data.get("transforms")),
            cells=_frozen_map({k: int(v) for k, v in (data.get("cells") or {}).items()}),
        )


@dataclass(frozen=True)
class PaymentHistoryConfig:
    container_selector: str = "div.mt-3.p-1.fs-12"
    bureau_selector: str = "div.d-flex.flex-wrap.payment-history"
    month_container_selector: str = "div.d-flex.gap-1.flex-wrap.flex-1"
    month_selector: str = 'div[class^="status-"]'
    badge_selector: str = "p.month-badge"
    label_selector: str = "p.month-label"
    status_prefix: str = "status-"
    min_bureaus: int = 3

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PaymentHistoryConfig":
        defaults = cls()
        data = data or {}
        return cls(**{k: data.get(k, getattr(defaults, k)) for k in defaults.__dataclass_fields__})


@dataclass(frozen=True)
class DaysLateConfig:
    heading_text: str = "Days Late - 7 Year History"
    candidate_selector: str = "div"
    heading_selector: str = "p"
    grid_selector: str = "div.d-grid.grid-cols-3"
    bureau_selector: str = "div.border-right.border-color-gray-600"
    values_selector: str = "div.d-grid.grid-cols-3.bg-gray-100.text-center.py-1"
    value_selector: str = "p span"
    buckets: Tuple[str, ...] = ("30", "60", "90")
    missing_value: str = "0"
    min_bureaus: int = 3

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DaysLateConfig":
        defaults = cls()
        data = dict(data or {})
        if "buckets" in data:
            data["buckets"] = _str_tuple(data["buckets"])
        return cls(**{k: data.get(k, getattr(defaults, k)) for k in defaults.__dataclass_fields__})


@dataclass(frozen=True)
class AccountListSectionConfig(SectionConfig):
    """Repeated account blocks, each with its own bureau grid."""

    kind: ClassVar[str] = "account-list"

    container_selector: str = "div.my-3.border-b.border-5.border-color-gray-300"
    name_selector: str = "p.h6 strong"
    grid_selector: str = "div.d-grid.grid-cols-4"
    column_selector: str = "div.d-contents.grid-rows-23"
    cell_selector: str = "p.grid-cell"
    fields: Tuple[str, ...] = ()
    date_fields: Tuple[str, ...] = ()
    payment_history: PaymentHistoryConfig = field(default_factory=PaymentHistoryConfig)
    days_late: DaysLateConfig = field(default_factory=DaysLateConfig)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return self.fields

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "AccountListSectionConfig":
        return cls(
            name=name,
            locator=SectionLocator.from_dict(data.get("locator")),
            container_selector=data.get("container_selector", cls.container_selector),
            name_selector=data.get("name_selector", cls.name_selector),
            grid_selector=data.get("grid_selector", cls.grid_selector),
            column_selector=data.get("column_selector", cls.column_selector),
            cell_selector=data.get("cell_selector", cls.cell_selector),
            fields=_str_tuple(data.get("fields")),
            date_fields=_str_tuple(data.get("date_fields")),
            payment_history=PaymentHistoryConfig.from_dict(data.get("payment_history")),
            days_late=DaysLateConfig.from_dict(data.get("days_late")),
        )


@dataclass(frozen=True)
class RowListSectionConfig(SectionConfig):
    """Flat list of rows, one record per row."""

    kind: ClassVar[str] = "row-list"

    row_selector: str = "div.d-grid.grid-cols-3.border-color-gray-100.border-b"
    cell_selector: str = "p.grid-cell"
    fields: Tuple[str, ...] = ()
    min_cells: int = 3
    required_field: Optional[str] = None

    @property
    def field_names(self) -> Tuple[str, ...]:
        return self.fields

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "RowListSectionConfig":
        return cls(
            name=name,
            locator=SectionLocator.from_dict(data.get("locator")),
            row_selector=data.get("row_selector", cls.row_selector),
            cell_selector=data.get("cell_selector", cls.cell_selector),
            fields=_str_tuple(data.get("fields")),
            min_cells=int(data.get("min_cells", 3)),
            required_field=data.get("required_field"),
        )


@dataclass(frozen=True)
class InteractiveListSectionConfig(SectionConfig):
    """Repeated blocks that only render after their toggles are activated."""

    kind: ClassVar[str] = "interactive-list"

    toggle_selector: str = "button"
    toggle_token: str = "show"
    container_selector: str = "div.creditor-contact"
    cell_selector: str = "p"
    fields: Tuple[FieldSpec, ...] = ()
    scoped: bool = False

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "InteractiveListSectionConfig":
        return cls(
            name=name,
            locator=SectionLocator.from_dict(data.get("locator")),
            toggle_selector=data.get("toggle_selector", cls.toggle_selector),
            toggle_token=data.get("toggle_token", cls.toggle_token),
            container_selector=data.get("container_selector", cls.container_selector),
            cell_selector=data.get("cell_selector", cls.cell_selector),
            fields=tuple(FieldSpec.from_value(v) for v in data.get("fields") or ()),
            scoped=bool(data.get("scoped", False)),
        )


@dataclass(frozen=True)
class ScoreStrategy:
    selector: str
    scope: Optional[str] = None
    pattern: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreStrategy":
        return cls(
            selector=data["selector"],
            scope=data.get("scope"),
            pattern=data.get("pattern"),
        )


@dataclass(frozen=True)
class ScoreTripleSectionConfig(SectionConfig):
    """Three score elements in bureau order, found by the first strategy that yields three."""

    kind: ClassVar[str] = "score-triple"

    strategies: Tuple[ScoreStrategy, ...] = ()

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ScoreTripleSectionConfig":
        return cls(
            name=name,
            strategies=tuple(ScoreStrategy.from_dict(s) for s in data.get("strategies") or ()),
        )


@dataclass(frozen=True)
class NarrativeSectionConfig(SectionConfig):
    """Score card values plus the free-text sentences around them."""

    kind: ClassVar[str] = "narrative"

    fields: Tuple[FieldSpec, ...] = ()
    text_selector: str = "small, p"

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "NarrativeSectionConfig":
        return cls(
            name=name,
            fields=tuple(FieldSpec.from_value(v) for v in data.get("fields") or ()),
            text_selector=data.get("text_selector", cls.text_selector),
        )


SECTION_KINDS: Dict[str, Type[SectionConfig]] = {
    cls.kind: cls
    for cls in (
        GridSectionConfig,
        AccountListSectionConfig,
        RowListSectionConfig,
        InteractiveListSectionConfig,
        ScoreTripleSectionConfig,
        NarrativeSectionConfig,
    )
}


@dataclass(frozen=True)
class SectionConfigSet:
    """All section configs for one document layout, keyed by section name."""

    sections: Mapping[str, SectionConfig]

    def get(self, name: str) -> Optional[SectionConfig]:
        return self.sections.get(name)

    def __getitem__(self, name: str) -> SectionConfig:
        return self.sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self.sections


__all__ = [
    "AccountListSectionConfig",
    "DaysLateConfig",
    "FieldSpec",
    "GridSectionConfig",
    "HEADING_MATCH_MODES",
    "InteractiveListSectionConfig",
    "NarrativeSectionConfig",
    "PaymentHistoryConfig",
    "RowListSectionConfig",
    "SECTION_KINDS",
    "ScoreStrategy",
    "ScoreTripleSectionConfig",
    "SectionConfig",
    "SectionConfigSet",
    "SectionLocator",
]
