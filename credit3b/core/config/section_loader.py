"""Utilities for loading and validating the section configuration."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml
from jsonschema import Draft7Validator, ValidationError

from credit3b.config import get_extraction_settings
from credit3b.core.errors import (
    CONFIG_INVALID,
    UNKNOWN_SECTION_KIND,
    SectionConfigError,
)
from credit3b.core.models.section_config import (
    SECTION_KINDS,
    SectionConfig,
    SectionConfigSet,
)

logger = logging.getLogger(__name__)

_SECTIONS_PATH = Path(__file__).with_name("sections.yaml")
_SCHEMA_PATH = Path(__file__).with_name("sections_schema.yaml")

_CONFIG_CACHE: Dict[Path, SectionConfigSet] = {}


def _validator() -> Draft7Validator:
    schema = yaml.safe_load(_SCHEMA_PATH.read_text(encoding="utf-8"))
    return Draft7Validator(schema)


def parse_section_configs(data: Mapping[str, Any]) -> SectionConfigSet:
    """Validate raw config ``data`` and build the typed section configs.

    Raises :class:`SectionConfigError` when ``data`` does not match
    ``sections_schema.yaml``.
    """

    try:
        _validator().validate(data)
    except ValidationError as exc:
        raise SectionConfigError(code=CONFIG_INVALID, message=exc.message) from exc

    sections: Dict[str, SectionConfig] = {}
    for name, raw in data["sections"].items():
        cls = SECTION_KINDS.get(raw["kind"])
        if cls is None:  # pragma: no cover - schema enumerates kinds
            raise SectionConfigError(
                code=UNKNOWN_SECTION_KIND, message=f"{name}: {raw['kind']}"
            )
        sections[name] = cls.from_dict(name, raw)  # type: ignore[attr-defined]
    return SectionConfigSet(sections=MappingProxyType(sections))


def load_section_configs(path: Optional[Path] = None) -> SectionConfigSet:
    """Load the section configs once per path and return the shared set.

    ``path`` defaults to ``CREDIT3B_SECTIONS_PATH`` when set, else the
    bundled ``sections.yaml``.
    """

    if path is None:
        path = get_extraction_settings().sections_path or _SECTIONS_PATH
    path = Path(path)

    cached = _CONFIG_CACHE.get(path)
    if cached is not None:
        return cached

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    configs = parse_section_configs(data)
    _CONFIG_CACHE[path] = configs
    logger.debug(
        "section_configs_loaded path=%s sections=%s", path, sorted(configs.sections)
    )
    return configs


def get_config_version(path: Optional[Path] = None) -> str:
    """Return a stable hash identifying the section config file in use."""

    if path is None:
        path = get_extraction_settings().sections_path or _SECTIONS_PATH
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def clear_config_cache() -> None:
    """Forget loaded configs (for tests)."""

    _CONFIG_CACHE.clear()


__all__ = [
    "clear_config_cache",
    "get_config_version",
    "load_section_configs",
    "parse_section_configs",
]
