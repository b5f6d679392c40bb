"""Creditor Contacts: blocks that render only after their toggles are shown."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from credit3b.core.errors import DocumentUnavailableError
from credit3b.core.io.document import DocumentAccessor, Element, nth
from credit3b.core.models.section_config import InteractiveListSectionConfig

from .sections import locate_section

logger = logging.getLogger(__name__)

Scope = Union[DocumentAccessor, Element]


def _scope(document: DocumentAccessor, config: InteractiveListSectionConfig) -> Optional[Scope]:
    if not config.scoped:
        return document
    return locate_section(document, config.locator, section=config.name)


def _is_reveal_toggle(toggle: Element, config: InteractiveListSectionConfig) -> bool:
    return config.toggle_token.lower() in toggle.text().lower()


def has_reveal_toggles(document: DocumentAccessor, config: InteractiveListSectionConfig) -> bool:
    scope = _scope(document, config)
    if scope is None:
        return False
    return any(_is_reveal_toggle(t, config) for t in scope.query_all(config.toggle_selector))


def reveal_contacts(document: DocumentAccessor, config: InteractiveListSectionConfig) -> int:
    """Activate every "show" toggle and return how many were activated.

    The caller owns the settling pause that must follow.
    """

    scope = _scope(document, config)
    if scope is None:
        return 0
    count = 0
    for toggle in scope.query_all(config.toggle_selector):
        if _is_reveal_toggle(toggle, config):
            document.activate(toggle)
            count += 1
    logger.info("contact_toggles_activated count=%d", count)
    return count


def reveal_contact(
    document: DocumentAccessor, config: InteractiveListSectionConfig, index: int
) -> bool:
    """Activate the ``index``-th toggle only, settling afterwards."""

    scope = _scope(document, config)
    if scope is None:
        return False
    toggle = nth(scope.query_all(config.toggle_selector), index)
    if toggle is None or not _is_reveal_toggle(toggle, config):
        return False
    document.activate(toggle)
    document.settle()
    return True


def _read_contact(container: Element, config: InteractiveListSectionConfig) -> Dict[str, Optional[str]]:
    cells: Optional[List[Element]] = None
    contact: Dict[str, Optional[str]] = {}
    for pos, item in enumerate(config.fields):
        if item.selector:
            el = container.query(item.selector)
        else:
            if cells is None:
                cells = container.query_all(config.cell_selector)
            el = nth(cells, pos)
        contact[item.name] = (el.text() if el is not None else "") or None
    return contact


def extract_creditor_contacts(
    document: DocumentAccessor,
    config: InteractiveListSectionConfig,
    *,
    reveal: bool = True,
) -> List[Dict[str, Optional[str]]]:
    """Reveal hidden contact details, wait for them to settle, then read them.

    With ``reveal=False`` the toggles are left alone and only content that
    is already expanded is read. Contacts with every field empty are dropped.
    """

    if reveal and reveal_contacts(document, config):
        document.settle()

    scope = _scope(document, config)
    if scope is None:
        return []

    contacts: List[Dict[str, Optional[str]]] = []
    for idx, container in enumerate(scope.query_all(config.container_selector), start=1):
        try:
            contact = _read_contact(container, config)
        except DocumentUnavailableError:
            raise
        except Exception:
            logger.warning("contact_read_failed position=%d", idx, exc_info=True)
            continue
        if any(contact.values()):
            contacts.append(contact)

    logger.info("creditor_contacts_extracted contacts=%d", len(contacts))
    return contacts


__all__ = [
    "extract_creditor_contacts",
    "has_reveal_toggles",
    "reveal_contact",
    "reveal_contacts",
]
