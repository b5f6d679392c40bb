from pathlib import Path

import pytest

from credit3b.analytics import analytics_tracker
from credit3b.core.config import section_loader
from credit3b.core.io.html_document import HtmlDocument
from tests.helpers.report_pages import report_page

FIXTURES = Path(__file__).with_name("fixtures")


@pytest.fixture(autouse=True)
def _isolated_state(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CREDIT3B_SECTIONS_PATH", raising=False)
    monkeypatch.delenv("CREDIT3B_SIZE_WARN_MB", raising=False)
    analytics_tracker.reset_counters()
    section_loader.clear_config_cache()
    yield
    analytics_tracker.reset_counters()
    section_loader.clear_config_cache()


@pytest.fixture
def configs():
    return section_loader.load_section_configs()


@pytest.fixture
def report_document() -> HtmlDocument:
    return HtmlDocument(report_page())


@pytest.fixture
def dashboard_document() -> HtmlDocument:
    return HtmlDocument.from_path(FIXTURES / "dashboard.html")
