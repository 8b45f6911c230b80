"""Actions and assertions on a located element.

Every Playwright failure is re-raised as ``InteractionError`` naming the
element's selector, so the protocol can fold it into a ``Failed`` outcome.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from navproto.exceptions import (
    ElementDisabledError,
    InteractionError,
    NavigationError,
    TextMismatchError,
)

if TYPE_CHECKING:
    from navproto.browser.session import BrowserSession
    from navproto.models.outcome import Located

logger = logging.getLogger(__name__)

_READ_STYLE_JS = "el => el.style.cssText"
_APPEND_STYLE_JS = "(el, style) => { el.style.cssText += style; }"
_RESTORE_STYLE_JS = "(el, style) => { el.style.cssText = style; }"
_SCROLL_TOP_JS = "el => el.scrollTop"


@contextmanager
def _interaction(located: Located, action: str) -> Iterator[None]:
    """Translate any browser error raised inside the block."""
    try:
        yield
    except NavigationError:
        raise
    except Exception as exc:
        raise InteractionError(located.identifier, action, str(exc)) from exc


def click(session: BrowserSession, located: Located) -> None:
    with _interaction(located, "click"):
        located.element.click(timeout=session.timeout_ms)
    logger.debug("Clicked %s", located.identifier)


def send_keys(session: BrowserSession, located: Located, text: str) -> None:
    """Type *text* into the element key by key."""
    with _interaction(located, "send_keys"):
        located.element.press_sequentially(text, timeout=session.timeout_ms)
    logger.debug("Sent %d key(s) to %s", len(text), located.identifier)


def scroll_into_view(session: BrowserSession, located: Located) -> None:
    with _interaction(located, "scroll_into_view"):
        located.element.scroll_into_view_if_needed(timeout=session.timeout_ms)


def highlight(session: BrowserSession, located: Located) -> None:
    """Briefly change the element's style for visual debugging.

    Saves ``style.cssText``, appends the configured highlight style, pauses
    for the configured duration and restores the original style.
    """
    cfg = session.settings.highlight
    element = located.element
    with _interaction(located, "highlight"):
        original = element.evaluate(_READ_STYLE_JS)
        try:
            element.evaluate(_APPEND_STYLE_JS, cfg.style)
            time.sleep(cfg.duration_ms / 1000)
        finally:
            element.evaluate(_RESTORE_STYLE_JS, original)


def read_text(session: BrowserSession, located: Located) -> str:
    with _interaction(located, "read text"):
        return located.element.inner_text(timeout=session.timeout_ms)


def read_attribute(session: BrowserSession, located: Located, name: str) -> str | None:
    with _interaction(located, f"read attribute {name!r}"):
        return located.element.get_attribute(name, timeout=session.timeout_ms)


def press_key(session: BrowserSession, located: Located, key: str) -> None:
    """Move the pointer over the element and press *key* on it."""
    with _interaction(located, f"press {key}"):
        located.element.hover(timeout=session.timeout_ms)
        located.element.press(key, timeout=session.timeout_ms)


def read_scroll_offset(located: Located) -> int:
    """Return the element's ``scrollTop`` as an integer."""
    with _interaction(located, "read scroll offset"):
        return int(located.element.evaluate(_SCROLL_TOP_JS))


def click_if(session: BrowserSession, located: Located, attribute: str, value: str) -> bool:
    """Click when *attribute* equals *value* case-insensitively.

    Returns:
        ``True`` when the click was performed.  A missing attribute or a
        different value is not an error.
    """
    actual = read_attribute(session, located, attribute)
    if actual is None or actual.casefold() != value.casefold():
        logger.debug(
            "Skipping click on %s: %s=%r does not match %r",
            located.identifier,
            attribute,
            actual,
            value,
        )
        return False
    click(session, located)
    return True


def assert_text(session: BrowserSession, located: Located, expected: str) -> None:
    """Compare rendered text to *expected* ignoring case only (no trimming).

    Raises:
        InteractionError: The text could not be read.
        TextMismatchError: The text differs.
    """
    actual = read_text(session, located)
    if actual is None or actual.casefold() != expected.casefold():
        raise TextMismatchError(located.identifier, expected, actual)


def assert_enabled(session: BrowserSession, located: Located) -> None:
    with _interaction(located, "is_enabled"):
        enabled = located.element.is_enabled(timeout=session.timeout_ms)
    if not enabled:
        raise ElementDisabledError(located.identifier)
