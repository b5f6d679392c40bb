from dataclasses import dataclass


@dataclass
class Credit3BError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class DocumentUnavailableError(Credit3BError):
    """The document accessor can no longer be read (page or browser gone)."""


class SectionConfigError(Credit3BError):
    """Section configuration data is malformed."""


# Known error codes
DOCUMENT_CLOSED = "DOCUMENT_CLOSED"
CONFIG_INVALID = "CONFIG_INVALID"
UNKNOWN_SECTION_KIND = "UNKNOWN_SECTION_KIND"


__all__ = [
    "Credit3BError",
    "DocumentUnavailableError",
    "SectionConfigError",
    "DOCUMENT_CLOSED",
    "CONFIG_INVALID",
    "UNKNOWN_SECTION_KIND",
]
