"""Fluent, immutable navigation protocol.

A ``NavigationProtocol`` is a snapshot of a navigation chain: the session it
drives, the current element outcome and the screenshots taken so far.  Every
operation returns a new protocol; none mutates the receiver.

Failures are absorbing.  Once an operation fails, the outcome becomes
``Failed(cause)`` and every later operation returns the protocol unchanged
without touching the browser.  Screenshots captured before a failure stay in
the history.  Nothing raises past the chain until :meth:`evaluate`.

Example::

    result = (
        NavigationProtocol.start(BrowserSession.from_page(page))
        .fetch("#username")
        .assert_enabled()
        .send_keys("test_user")
        .fetch("button[type=submit]")
        .click()
        .wait_until(WaitCondition.present("#confirmation"))
        .fetch("#confirmation")
        .assert_text("Booking Confirmed")
        .take_screenshot("confirmation")
        .evaluate()
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable

from navproto.browser import actions
from navproto.browser.locator import fetch_element
from navproto.browser.screenshots import take_screenshot as _take_screenshot
from navproto.browser.scroll import scroll_to_end
from navproto.browser.session import BrowserSession
from navproto.browser.waits import WaitCondition
from navproto.exceptions import (
    InteractionError,
    NavigationError,
    NotFetchedError,
    ScreenshotError,
    ScrollError,
)
from navproto.models.outcome import ElementOutcome, Failed, Located, NotFetched, VisibilityFilter
from navproto.models.results import NavigationResult
from navproto.models.screenshot import Screenshot

logger = logging.getLogger(__name__)

_PAGE_IDENTIFIER = "<page>"


@dataclass(frozen=True)
class NavigationProtocol:
    """Immutable state of one navigation chain.

    Attributes:
        session: Browser session the chain drives. Referenced, never closed.
        outcome: ``NotFetched``, ``Located`` or ``Failed``.
        screenshots: Screenshots taken so far, in call order.
    """

    session: BrowserSession
    outcome: ElementOutcome = field(default_factory=NotFetched)
    screenshots: tuple[Screenshot, ...] = ()

    @classmethod
    def start(cls, session: BrowserSession) -> "NavigationProtocol":
        """Begin a chain with nothing fetched and no screenshots."""
        return cls(session=session)

    @property
    def failed(self) -> bool:
        return isinstance(self.outcome, Failed)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _fail(
        self,
        action: str,
        cause: NavigationError,
        screenshots: tuple[Screenshot, ...] | None = None,
    ) -> "NavigationProtocol":
        logger.warning("Navigation step %s failed: %s", action, cause)
        return replace(
            self,
            outcome=Failed(cause),
            screenshots=self.screenshots if screenshots is None else screenshots,
        )

    def _update(self, action: str, step: Callable[[], ElementOutcome]) -> "NavigationProtocol":
        """Run *step* unless failed and adopt the outcome it returns."""
        if self.failed:
            return self
        try:
            outcome = step()
        except NavigationError as exc:
            return self._fail(action, exc)
        except Exception as exc:
            identifier = self.outcome.identifier if isinstance(self.outcome, Located) else _PAGE_IDENTIFIER
            error = InteractionError(identifier, action, str(exc))
            error.__cause__ = exc
            return self._fail(action, error)
        return replace(self, outcome=outcome)

    def _with_element(self, action: str, operate: Callable[[Located], object]) -> "NavigationProtocol":
        """Run *operate* on the located element, keeping it on success."""
        if self.failed:
            return self
        if isinstance(self.outcome, NotFetched):
            return self._fail(action, NotFetchedError(action))
        located = self.outcome

        def step() -> ElementOutcome:
            operate(located)
            return located

        return self._update(action, step)

    # ------------------------------------------------------------------
    # Element lookup
    # ------------------------------------------------------------------

    def fetch(self, selector: str, filter: VisibilityFilter = VisibilityFilter.VISIBLE) -> "NavigationProtocol":
        """Locate *selector* and make it the current element.

        Args:
            selector: Playwright selector (CSS by default, ``xpath=``/``text=``
                prefixes supported).
            filter: ``VISIBLE`` (default) additionally requires the match to
                be rendered; ``ANY`` accepts any attached match.
        """
        return self._update("fetch", lambda: fetch_element(self.session, selector, filter))

    # ------------------------------------------------------------------
    # Element actions
    # ------------------------------------------------------------------

    def click(self) -> "NavigationProtocol":
        return self._with_element("click", lambda el: actions.click(self.session, el))

    def send_keys(self, text: str) -> "NavigationProtocol":
        """Type *text* into the current element."""
        return self._with_element("send_keys", lambda el: actions.send_keys(self.session, el, text))

    def scroll_into_view(self) -> "NavigationProtocol":
        return self._with_element("scroll_into_view", lambda el: actions.scroll_into_view(self.session, el))

    def highlight(self) -> "NavigationProtocol":
        """Flash the current element's background for visual debugging."""
        return self._with_element("highlight", lambda el: actions.highlight(self.session, el))

    def click_if(self, attribute: str, value: str) -> "NavigationProtocol":
        """Click only if *attribute* equals *value* (case-insensitive).

        A missing attribute or another value leaves the chain untouched.
        """
        return self._with_element("click_if", lambda el: actions.click_if(self.session, el, attribute, value))

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def assert_text(self, expected: str) -> "NavigationProtocol":
        """Fail unless the element's rendered text equals *expected*, ignoring case.

        Whitespace is significant: ``"Booking Confirmed "`` does not match
        ``"Booking Confirmed"``.
        """
        return self._with_element("assert_text", lambda el: actions.assert_text(self.session, el, expected))

    def assert_enabled(self) -> "NavigationProtocol":
        return self._with_element("assert_enabled", lambda el: actions.assert_enabled(self.session, el))

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait_until(self, condition: WaitCondition) -> "NavigationProtocol":
        """Block until *condition* holds; keeps the current element."""

        def step() -> ElementOutcome:
            condition.evaluate(self.session)
            return self.outcome

        return self._update("wait_until", step)

    # ------------------------------------------------------------------
    # Screenshots
    # ------------------------------------------------------------------

    def take_screenshot(self, name: str, folder: Path | str | None = None) -> "NavigationProtocol":
        """Save the viewport as ``<folder>/<name>.<ext>`` and append it to the history.

        Args:
            name: Logical screenshot name.
            folder: Target folder. Defaults to ``screenshots.output_dir``.
        """
        if self.failed:
            return self
        try:
            shot = _take_screenshot(self.session, name, folder)
        except NavigationError as exc:
            return self._fail("take_screenshot", exc)
        except Exception as exc:
            error = ScreenshotError(f"Screenshot {name!r} failed: {exc}")
            error.__cause__ = exc
            return self._fail("take_screenshot", error)
        return replace(self, screenshots=self.screenshots + (shot,))

    def scroll_to_end_with_screenshots(
        self,
        selector: str,
        name: str,
        folder: Path | str | None = None,
    ) -> "NavigationProtocol":
        """Scroll the container matching *selector* to its end, one screenshot per step.

        Screenshots are named ``<name>-1``, ``<name>-2``, ... and appended in
        chronological order.  The current element is kept.  If the loop
        aborts, the screenshots it already took are kept in the history.
        """
        if self.failed:
            return self
        try:
            shots = scroll_to_end(self.session, selector, name, folder)
        except ScrollError as exc:
            return self._fail(
                "scroll_to_end_with_screenshots",
                exc,
                self.screenshots + exc.partial_screenshots,
            )
        except NavigationError as exc:
            return self._fail("scroll_to_end_with_screenshots", exc)
        except Exception as exc:
            error = ScrollError(selector, str(exc))
            error.__cause__ = exc
            return self._fail("scroll_to_end_with_screenshots", error)
        return replace(self, screenshots=self.screenshots + shots)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def merge_result(self, result: NavigationResult | NavigationError) -> "NavigationProtocol":
        """Fold an externally produced result (or failure) into this chain.

        A failure becomes this chain's failure; the history is kept.  A
        result replaces the current element and its screenshots are appended.
        """
        if self.failed:
            return self
        if isinstance(result, NavigationError):
            return self._fail("merge_result", result)
        return replace(
            self,
            outcome=result.element,
            screenshots=self.screenshots + tuple(result.screenshots),
        )

    def merge_protocol(self, other: "NavigationProtocol") -> "NavigationProtocol":
        """Adopt *other*'s outcome and append its screenshots after ours."""
        if self.failed:
            return self
        if isinstance(other.outcome, Failed):
            logger.warning("Merged navigation failed: %s", other.outcome.cause)
        return replace(
            self,
            outcome=other.outcome,
            screenshots=self.screenshots + other.screenshots,
        )

    # ------------------------------------------------------------------
    # Terminal evaluation
    # ------------------------------------------------------------------

    def evaluate(self) -> NavigationResult:
        """Return the final element and screenshots.

        Raises:
            NavigationError: The first failure the chain absorbed.
        """
        if isinstance(self.outcome, Failed):
            raise self.outcome.cause
        return NavigationResult(element=self.outcome, screenshots=self.screenshots)

    def evaluate_or_error(self) -> NavigationResult | NavigationError:
        """Like :meth:`evaluate`, but return the failure instead of raising it."""
        if isinstance(self.outcome, Failed):
            return self.outcome.cause
        return NavigationResult(element=self.outcome, screenshots=self.screenshots)

    # Dialogue-style aliases: protocol.fetch(...).then_click().then_take_screenshot(...)
    then_fetch = fetch
    then_click = click
    then_send_keys = send_keys
    then_scroll_into_view = scroll_into_view
    then_highlight = highlight
    then_click_if = click_if
    then_assert_text = assert_text
    then_assert_enabled = assert_enabled
    then_wait_until = wait_until
    then_take_screenshot = take_screenshot
    then_scroll_to_end_with_screenshots = scroll_to_end_with_screenshots
