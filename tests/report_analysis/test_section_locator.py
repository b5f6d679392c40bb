import logging

from credit3b.analytics.analytics_tracker import get_counters
from credit3b.core.io.html_document import HtmlDocument
from credit3b.core.logic.report_analysis.extractors.sections import (
    heading_matches,
    locate_section,
)
from credit3b.core.models.section_config import SectionLocator
from tests.helpers.report_pages import report_page, section, summary_section


def _heading(el):
    h5 = el.query("h5")
    return h5.text() if h5 is not None else None


def test_heading_matches_modes():
    exact = SectionLocator(heading="Inquiries")
    contains = SectionLocator(heading="Account History", match="contains")
    assert heading_matches(" Inquiries ", exact)
    assert not heading_matches("Inquiries (2 years)", exact)
    assert heading_matches("Account History (34)", contains)
    assert not heading_matches("anything", SectionLocator(ordinal=0))


def test_heading_match_wins_over_ordinal(report_document):
    locator = SectionLocator(heading="Account History", match="contains", ordinal=0)
    found = locate_section(report_document, locator, section="account_history")
    assert _heading(found) == "Account History"
    assert "extraction.locator.degraded" not in get_counters()


def test_ordinal_fallback_is_logged_and_counted(caplog):
    # Section headings renamed: only positions remain.
    html = report_page(summary=section("Overview", ""), personal=section(None, ""))
    document = HtmlDocument(html)
    locator = SectionLocator(heading="Summary", match="contains", ordinal=1)

    with caplog.at_level(logging.WARNING):
        found = locate_section(document, locator, section="summary")

    assert _heading(found) == "Overview"
    assert "section_locator_degraded" in caplog.text
    counters = get_counters()
    assert counters["extraction.locator.degraded"] == 1
    assert counters["extraction.summary.degraded"] == 1


def test_heading_without_ordinal_never_falls_back():
    document = HtmlDocument(report_page(inquiries=""))
    locator = SectionLocator(heading="Inquiries")
    assert locate_section(document, locator, section="inquiries") is None


def test_ordinal_only_locator_indexes_directly():
    document = HtmlDocument(f"<main>{section('A', '')}{summary_section()}</main>")
    assert _heading(locate_section(document, SectionLocator(ordinal=1))) == "Summary"
    assert locate_section(document, SectionLocator(ordinal=5)) is None


def test_no_candidates_returns_none():
    document = HtmlDocument("<main><div>nothing here</div></main>")
    locator = SectionLocator(heading="Summary", ordinal=1)
    assert locate_section(document, locator) is None
