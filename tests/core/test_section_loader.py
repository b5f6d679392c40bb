import pytest
import yaml

from credit3b.core.config import section_loader
from credit3b.core.errors import CONFIG_INVALID, SectionConfigError
from credit3b.core.models.section_config import (
    AccountListSectionConfig,
    GridSectionConfig,
    InteractiveListSectionConfig,
    NarrativeSectionConfig,
    RowListSectionConfig,
    ScoreTripleSectionConfig,
)


def test_bundled_configs_load_with_expected_kinds():
    configs = section_loader.load_section_configs()

    assert isinstance(configs["scores"], ScoreTripleSectionConfig)
    assert isinstance(configs["personal_info"], GridSectionConfig)
    assert isinstance(configs["summary"], GridSectionConfig)
    assert isinstance(configs["account_history"], AccountListSectionConfig)
    assert isinstance(configs["inquiries"], RowListSectionConfig)
    assert isinstance(configs["creditor_contacts"], InteractiveListSectionConfig)
    assert isinstance(configs["dashboard"], NarrativeSectionConfig)
    assert "missing" not in configs
    assert configs.get("missing") is None


def test_bundled_locators_declare_fallbacks():
    configs = section_loader.load_section_configs()

    account = configs["account_history"]
    assert account.locator.heading == "Account History"
    assert account.locator.match == "contains"
    assert account.locator.ordinal == 2
    assert len(account.fields) == 22
    assert set(account.date_fields) <= set(account.fields)

    inquiries = configs["inquiries"].locator
    assert inquiries.match == "exact" and inquiries.ordinal is None

    summary = configs["summary"]
    assert summary.default_transform == "extract_number"
    assert summary.transforms["balances"] == "clean_text"
    assert summary.cells["public_records"] == 8
    assert configs["personal_info"].field_names[0] == "credit_report_date"


def test_configs_are_cached_and_immutable():
    first = section_loader.load_section_configs()
    assert section_loader.load_section_configs() is first
    with pytest.raises(TypeError):
        first.sections["extra"] = first["scores"]  # type: ignore[index]
    with pytest.raises(AttributeError):
        first["summary"].grid_index = 3  # type: ignore[misc]


def test_sections_path_override(tmp_path, monkeypatch):
    path = tmp_path / "sections.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "sections": {
                    "summary": {
                        "kind": "grid",
                        "locator": {"heading": "Totals", "ordinal": 0},
                        "fields": ["total"],
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("CREDIT3B_SECTIONS_PATH", str(path))

    configs = section_loader.load_section_configs()
    assert list(configs.sections) == ["summary"]
    assert configs["summary"].locator.heading == "Totals"
    assert section_loader.get_config_version() != section_loader.get_config_version(
        section_loader._SECTIONS_PATH
    )


@pytest.mark.parametrize(
    "section",
    [
        {"kind": "table"},
        {"kind": "grid", "locator": {"match": "exact"}},
        {"kind": "grid", "locator": {"heading": "X", "match": "fuzzy"}},
        {"kind": "grid", "default_transform": "uppercase"},
        {"kind": "score-triple", "strategies": []},
    ],
)
def test_invalid_configs_raise(section):
    with pytest.raises(SectionConfigError) as excinfo:
        section_loader.parse_section_configs({"sections": {"broken": section}})
    assert excinfo.value.code == CONFIG_INVALID


def test_config_version_is_stable():
    assert section_loader.get_config_version() == section_loader.get_config_version()
    assert len(section_loader.get_config_version()) == 64
