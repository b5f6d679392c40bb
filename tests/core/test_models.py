import pytest
from pydantic import ValidationError

from credit3b.core.models.report import (
    SECTION_NAMES,
    Account,
    AccountHistoryPagination,
    ExtractionOptions,
    Report,
)


def test_default_options_request_everything():
    options = ExtractionOptions()
    assert options.requested_sections() == SECTION_NAMES
    assert options.wants("creditor_contacts")
    assert options.paginate is False
    assert options.include_dashboard is False


def test_legacy_camel_case_names_are_accepted():
    options = ExtractionOptions.model_validate(
        {
            "sections": ["personalInfo", "accountHistory", "summary", "summary"],
            "accountHistory": {"limit": 20, "offset": 40},
            "includeDashboard": True,
        }
    )
    assert options.sections == ("personal_info", "account_history", "summary")
    assert options.requested_sections() == ("personal_info", "summary", "account_history")
    assert options.account_history.limit == 20
    assert options.account_history.offset == 40
    assert options.paginate is True
    assert options.include_dashboard is True
    assert not options.wants("scores")


def test_single_section_string_and_empty_list():
    assert ExtractionOptions(sections="scores").sections == ("scores",)
    assert ExtractionOptions(sections=None).sections == ("all",)
    empty = ExtractionOptions(sections=[])
    assert empty.sections == ()
    assert empty.requested_sections() == ()
    assert not empty.wants("scores")


@pytest.mark.parametrize(
    "payload",
    [
        {"sections": ["bogus"]},
        {"accountHistory": {"limit": 0}},
        {"accountHistory": {"limit": 5, "offset": -1}},
    ],
)
def test_invalid_options_are_rejected(payload):
    with pytest.raises(ValidationError):
        ExtractionOptions.model_validate(payload)


def test_options_are_frozen():
    options = ExtractionOptions()
    with pytest.raises(ValidationError):
        options.include_dashboard = True


def test_report_to_dict_includes_optional_keys_only_when_set():
    account = Account(
        account_name="CAPITAL ONE",
        bureaus={"transunion": {"account_number": "1"}},
    )
    report = Report(
        credit_scores_3b=None,
        personal_information=None,
        summary=None,
        account_history=[account],
        public_records=None,
        inquiries=None,
        creditor_contacts=None,
        scraped_at="2025-12-10T00:00:00Z",
        account_history_pagination=AccountHistoryPagination(1, 20, 0, False),
    )
    data = report.to_dict()
    assert data["account_history"] == [
        {
            "account_name": "CAPITAL ONE",
            "transunion": {"account_number": "1"},
            "experian": None,
            "equifax": None,
            "payment_history": None,
            "days_late": None,
        }
    ]
    assert data["account_history_pagination"]["hasMore"] is False
    assert data["dashboard_summary"] is None
