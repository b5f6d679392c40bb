"""Field transforms turning scraped text into typed report values.

Every function here is total: malformed input yields ``None`` rather than an
exception, so a single odd cell never aborts a section.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from credit3b.core.models.section_config import GridSectionConfig

BUREAUS = ("transunion", "experian", "equifax")

_NON_NUMERIC_RE = re.compile(r"[^\d.\-+]")
_LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")

_STARTING_SCORE_RE = re.compile(r"starting score was\s+(\d+)", re.I)
_POINTS_ADDED_RE = re.compile(r"added\s+\+?(\d+)\s+pts", re.I)
_BOOST_POTENTIAL_RE = re.compile(r"\+(\d+)\s+pts", re.I)
_INCREASE_RE = re.compile(r"increase.*?\+?(\d+)\s+pts", re.I)
_DECREASE_RE = re.compile(r"decrease.*?-(\d+)\s+pts", re.I)

_ABSENT_TEXT = {"", "--"}


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _finite(value: float) -> Optional[float | int]:
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def extract_number(text: Any) -> Optional[float | int]:
    """Return the numeric value embedded in ``text``.

    Everything except digits, ``.``, ``-`` and ``+`` is dropped and the
    longest leading float is parsed, so ``"+34 pts"`` gives 34,
    ``"-168 pts"`` gives -168 and ``"$652.05"`` gives 652.05. Numbers are
    passed through unless they are NaN.
    """

    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        if isinstance(text, float):
            return None if math.isnan(text) else text
        return text

    raw = _as_text(text)
    if raw is None:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", raw)
    m = _LEADING_FLOAT_RE.match(cleaned)
    if not m:
        return None
    try:
        return _finite(float(m.group(0)))
    except ValueError:
        return None


def parse_date(text: Any) -> Optional[str]:
    """Reformat the first ``M/D/YYYY`` substring of ``text`` as ``YYYY-MM-DD``.

    This is a pure reformatting step: ``"13/45/2025"`` becomes
    ``"2025-13-45"``. No calendar validation is applied.
    """

    raw = _as_text(text)
    if raw is None:
        return None
    m = _DATE_RE.search(raw)
    if not m:
        return None
    month, day, year = m.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def clean_text(text: Any) -> Optional[str]:
    """Strip ``text``; empty strings and the ``--`` placeholder become ``None``.

    Currency and percent formatting is preserved verbatim.
    """

    raw = _as_text(text)
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in _ABSENT_TEXT:
        return None
    return cleaned


# Narrative helpers ----------------------------------------------------------


@dataclass(frozen=True)
class ScoreProgress:
    starting_score: Optional[int]
    points_gained: Optional[int]


@dataclass(frozen=True)
class ScoreBoost:
    payment_boost: Optional[int]
    negative_impact: Optional[int]


def _match_int(pattern: re.Pattern[str], text: str) -> Optional[int]:
    m = pattern.search(text)
    return int(m.group(1)) if m else None


def parse_score_progress(text: Any) -> ScoreProgress:
    """``"Your starting score was 635. You added +178 pts"`` -> (635, 178)."""

    raw = _as_text(text)
    if raw is None:
        return ScoreProgress(None, None)
    return ScoreProgress(
        starting_score=_match_int(_STARTING_SCORE_RE, raw),
        points_gained=_match_int(_POINTS_ADDED_RE, raw),
    )


def parse_boost_potential(text: Any) -> Optional[int]:
    """``"Taking action can increase your score +34 pts."`` -> 34."""

    raw = _as_text(text)
    if raw is None:
        return None
    return _match_int(_BOOST_POTENTIAL_RE, raw)


def parse_score_boost(text: Any) -> ScoreBoost:
    """Split a ScoreBoost sentence into its increase and decrease deltas."""

    raw = _as_text(text)
    if raw is None:
        return ScoreBoost(None, None)
    decrease = _match_int(_DECREASE_RE, raw)
    return ScoreBoost(
        payment_boost=_match_int(_INCREASE_RE, raw),
        negative_impact=-decrease if decrease is not None else None,
    )


# Section-level helpers ------------------------------------------------------

Transform = Callable[[Any], Any]

TRANSFORMS: Dict[str, Transform] = {
    "extract_number": extract_number,
    "clean_text": clean_text,
    "parse_date": parse_date,
}


def get_transform(name: str) -> Transform:
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise KeyError(f"unknown transform: {name}") from None


def apply_field_transforms(
    raw: Optional[Mapping[str, Any]],
    fields: Iterable[str],
    *,
    default: str = "clean_text",
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Transform one bureau's raw field map, keeping every field name."""

    data = raw or {}
    table = overrides or {}
    out: Dict[str, Any] = {}
    for name in fields:
        fn = get_transform(table.get(name, default))
        out[name] = fn(data.get(name))
    return out


def parse_3b_scores(raw_scores: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """``{"transunion": "770", ...}`` -> ``{"transunion": 770, ...}``."""

    data = raw_scores or {}
    return {bureau: extract_number(data.get(bureau)) for bureau in BUREAUS}


def parse_3b_grid(
    raw: Optional[Mapping[str, Any]], config: GridSectionConfig
) -> Optional[Dict[str, Dict[str, Any]]]:
    """Apply a grid section's configured transforms to every bureau map.

    Each bureau carries the full configured field set, so a bureau missing
    from ``raw`` reads as all ``None``.
    """

    if raw is None:
        return None
    return {
        bureau: apply_field_transforms(
            raw.get(bureau),
            config.fields,
            default=config.default_transform,
            overrides=config.transforms,
        )
        for bureau in BUREAUS
    }


def build_credit_score_data(
    raw: Mapping[str, Any], *, scraped_at: Optional[str] = None
) -> Dict[str, Any]:
    """Shape dashboard score-card values into the dashboard summary block."""

    current = raw.get("current_score")
    starting = raw.get("starting_score")
    gained = raw.get("points_gained")
    return {
        "credit_score_info": {
            "current_score": current,
            "score_date": raw.get("score_date"),
            "starting_score": starting,
            "points_gained": gained,
        },
        "score_tracker": {
            "current_score": current,
            "starting_score": starting,
            "points_added": gained,
        },
        "score_builder": {
            "potential_boost": raw.get("score_builder_boost"),
            "description": "Taking action directly with the source",
        },
        "score_boost": {
            "payment_boost": raw.get("payment_boost"),
            "negative_impact": raw.get("negative_impact"),
            "description": raw.get("score_boost_description")
            or "Payment and spending impact",
        },
        "future_score": raw.get("future_score"),
        "scraped_at": scraped_at,
    }


__all__ = [
    "BUREAUS",
    "ScoreBoost",
    "ScoreProgress",
    "TRANSFORMS",
    "apply_field_transforms",
    "build_credit_score_data",
    "clean_text",
    "extract_number",
    "get_transform",
    "parse_3b_grid",
    "parse_3b_scores",
    "parse_boost_potential",
    "parse_date",
    "parse_score_boost",
    "parse_score_progress",
]
