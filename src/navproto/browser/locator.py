"""Selector resolution against a Playwright page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from navproto.exceptions import ElementNotFoundError, LocateError, NoVisibleElementError
from navproto.models.outcome import Located, VisibilityFilter

if TYPE_CHECKING:
    from playwright.sync_api import Locator

    from navproto.browser.session import BrowserSession

logger = logging.getLogger(__name__)


def find_element(session: BrowserSession, selector: str) -> Locator:
    """Wait for at least one match of *selector* and return the first one.

    Raises:
        ElementNotFoundError: Nothing matched within the session timeout.
        LocateError: Playwright rejected the lookup (bad selector, closed page).
    """
    first = session.page.locator(selector).first
    try:
        first.wait_for(state="attached", timeout=session.timeout_ms)
    except PlaywrightTimeout as exc:
        raise ElementNotFoundError(selector) from exc
    except PlaywrightError as exc:
        raise LocateError(selector, f"Lookup of {selector} failed: {exc}") from exc
    return first


def query_elements(session: BrowserSession, selector: str) -> list[Locator]:
    """Return every current match of *selector* in DOM order, without waiting."""
    return session.page.locator(selector).all()


def find_elements(session: BrowserSession, selector: str) -> list[Locator]:
    """Wait for presence of *selector*, then return all matches in DOM order.

    Public helper for flows that need every match; the protocol itself only
    works on single elements.  ``WaitCondition`` uses :func:`query_elements`
    instead, since an absence check must not block until a match appears.

    Raises:
        ElementNotFoundError: Nothing matched within the session timeout.
    """
    find_element(session, selector)
    try:
        return query_elements(session, selector)
    except PlaywrightError as exc:
        raise LocateError(selector, f"Lookup of {selector} failed: {exc}") from exc


def fetch_element(
    session: BrowserSession,
    selector: str,
    visibility: VisibilityFilter = VisibilityFilter.VISIBLE,
) -> Located:
    """Locate *selector* and apply the visibility filter.

    Raises:
        ElementNotFoundError: Nothing matched.
        NoVisibleElementError: ``VISIBLE`` was requested and the match is hidden.
    """
    element = find_element(session, selector)
    if visibility is VisibilityFilter.VISIBLE:
        try:
            visible = element.is_visible()
        except PlaywrightError as exc:
            raise LocateError(selector, f"Visibility check on {selector} failed: {exc}") from exc
        if not visible:
            raise NoVisibleElementError(selector)
    logger.debug("Fetched %s (filter=%s)", selector, visibility.value)
    return Located(element=element, identifier=selector)
