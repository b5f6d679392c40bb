"""Section configuration data and its loader."""

from .section_loader import (
    clear_config_cache,
    get_config_version,
    load_section_configs,
    parse_section_configs,
)

__all__ = [
    "clear_config_cache",
    "get_config_version",
    "load_section_configs",
    "parse_section_configs",
]
