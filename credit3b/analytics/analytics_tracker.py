import logging
from typing import Dict

logger = logging.getLogger(__name__)

# Generic counters -----------------------------------------------------------

# Metrics are stored as floats to support both counters and timers.
_COUNTERS: Dict[str, float] = {}


def emit_counter(name: str, increment: float = 1) -> None:
    """Increment a named metric for analytics."""

    _COUNTERS[name] = _COUNTERS.get(name, 0) + increment


def set_metric(name: str, value: float) -> None:
    """Set a named metric to an explicit value."""

    _COUNTERS[name] = value


def get_counters() -> Dict[str, float]:
    """Return current generic metrics (for tests)."""

    return _COUNTERS.copy()


def reset_counters() -> None:
    """Reset generic metrics (for tests)."""

    _COUNTERS.clear()


# Extraction helpers ---------------------------------------------------------

def log_section_outcome(section: str, outcome: str) -> None:
    """Record the outcome (``ok``/``empty``/``failed``) of one section read."""

    emit_counter(f"extraction.section.{outcome}")
    emit_counter(f"extraction.{section}.{outcome}")
    logger.debug("section_outcome section=%s outcome=%s", section, outcome)


def log_degraded_locator(section: str) -> None:
    """Record a section located through its fallback ordinal."""

    emit_counter("extraction.locator.degraded")
    emit_counter(f"extraction.{section}.degraded")
