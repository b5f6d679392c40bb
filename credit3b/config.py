import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from environs import Env

env = Env()
env.read_env()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionSettings:
    """Environment-backed tunables for a single extraction run."""

    settle_delay_ms: int
    default_page_limit: int
    size_warn_mb: float
    sections_path: Optional[Path]
    log_level: str


_WARNED_DEFAULT_KEYS: set[str] = set()


def env_str(name: str, default: str) -> str:
    """Fetch a string environment variable."""
    return os.getenv(name, default)


def env_float(name: str, default: float) -> float:
    """Parse a float environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _warn_default(key: str, raw: object, default: object, reason: str) -> None:
    """Emit a structured warning when falling back to a default value."""

    if key in _WARNED_DEFAULT_KEYS:
        return

    _WARNED_DEFAULT_KEYS.add(key)
    payload = {
        "key": key,
        "value": "" if raw is None else str(raw),
        "default": default,
        "reason": reason,
    }
    logger.warning("CREDIT3B_CONFIG_DEFAULT %s", json.dumps(payload, sort_keys=True))


def _coerce_non_negative_int(key: str, default: int, *, min_value: int = 0) -> int:
    """Return an integer parsed from the environment, bounded below."""

    raw = os.getenv(key)
    if raw is None:
        return default

    try:
        value = int(str(raw).strip())
    except Exception:
        _warn_default(key, raw, default, "invalid_int")
        return default

    if value < min_value:
        _warn_default(key, raw, default, f"min_{min_value}")
        return default

    return value


def _optional_path(key: str) -> Optional[Path]:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def get_extraction_settings() -> ExtractionSettings:
    """Return extraction settings loaded from the environment."""

    return ExtractionSettings(
        settle_delay_ms=_coerce_non_negative_int("CREDIT3B_SETTLE_DELAY_MS", 2000),
        default_page_limit=_coerce_non_negative_int(
            "CREDIT3B_DEFAULT_PAGE_LIMIT", 20, min_value=1
        ),
        size_warn_mb=env_float("CREDIT3B_SIZE_WARN_MB", 2.0),
        sections_path=_optional_path("CREDIT3B_SECTIONS_PATH"),
        log_level=env_str("CREDIT3B_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger once."""

    pkg_logger = logging.getLogger("credit3b")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
        pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level or get_extraction_settings().log_level)
    return pkg_logger


__all__ = [
    "ExtractionSettings",
    "configure_logging",
    "env",
    "env_float",
    "env_str",
    "get_extraction_settings",
]
