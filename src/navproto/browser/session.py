"""Session handle threaded through every navigation chain.

The session references a Playwright ``Page`` it does not own: navproto
never launches, closes or navigates the browser.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from navproto.exceptions import WaitTimeoutError
from navproto.settings import Settings, get_settings

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserSession:
    """A Playwright page plus the bounded-wait configuration used on it.

    Attributes:
        page: Playwright sync ``Page``.
        timeout_ms: Upper bound for element lookups and wait conditions.
        poll_interval_ms: Delay between two evaluations of a wait condition.
        settings: Settings consulted for screenshot, scroll and highlight
            defaults.
    """

    page: Page
    timeout_ms: int = 10_000
    poll_interval_ms: int = 500
    settings: Settings = field(default_factory=get_settings, repr=False)

    @classmethod
    def from_page(cls, page: Page, settings: Settings | None = None) -> "BrowserSession":
        """Build a session for *page* using the browser section of *settings*."""
        settings = settings or get_settings()
        return cls(
            page=page,
            timeout_ms=settings.browser.timeout_ms,
            poll_interval_ms=settings.browser.poll_interval_ms,
            settings=settings,
        )

    def poll_until(self, predicate: Callable[[], bool], message: str) -> None:
        """Evaluate *predicate* until it returns true or the timeout elapses.

        The first evaluation happens immediately.  Exceptions raised by the
        predicate propagate.

        Raises:
            WaitTimeoutError: If *predicate* never held within ``timeout_ms``.
        """
        deadline = time.monotonic() + self.timeout_ms / 1000
        polls = 0
        while True:
            polls += 1
            if predicate():
                logger.debug("Condition met after %d poll(s): %s", polls, message)
                return
            if time.monotonic() >= deadline:
                raise WaitTimeoutError(message, self.timeout_ms)
            time.sleep(self.poll_interval_ms / 1000)
