from credit3b.core.errors import (
    CONFIG_INVALID,
    DOCUMENT_CLOSED,
    Credit3BError,
    DocumentUnavailableError,
    SectionConfigError,
)


def test_error_string_includes_code():
    err = DocumentUnavailableError(code=DOCUMENT_CLOSED, message="page has been closed")
    assert str(err) == "DOCUMENT_CLOSED: page has been closed"
    assert isinstance(err, Credit3BError)


def test_config_error_fields():
    err = SectionConfigError(code=CONFIG_INVALID, message="bad kind")
    assert err.code == CONFIG_INVALID
    assert err.message == "bad kind"
