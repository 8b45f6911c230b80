"""navproto exception hierarchy.

Every failure a navigation chain can absorb is a ``NavigationError``.  The
protocol never raises these past the chain boundary; they are stored in the
``Failed`` outcome and surface from ``NavigationProtocol.evaluate()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from navproto.models.screenshot import Screenshot


class NavigationError(Exception):
    """Base exception for all navproto errors."""


class NotFetchedError(NavigationError):
    """Raised when an element operation runs before any element was fetched."""

    def __init__(self, action: str = "") -> None:
        self.action = action
        suffix = f" (attempted: {action})" if action else ""
        super().__init__(f"Invalid state. You need to first fetch an element.{suffix}")


# ---------------------------------------------------------------------------
# Locate
# ---------------------------------------------------------------------------


class LocateError(NavigationError):
    """The selector could not be resolved to a usable element."""

    def __init__(self, selector: str, message: str) -> None:
        self.selector = selector
        super().__init__(message)


class ElementNotFoundError(LocateError):
    """No element matched the selector within the session timeout."""

    def __init__(self, selector: str) -> None:
        super().__init__(selector, f"No element found matching {selector}")


class NoVisibleElementError(LocateError):
    """An element matched, but it is not currently rendered."""

    def __init__(self, selector: str) -> None:
        super().__init__(selector, f"No visible element found matching {selector}")


# ---------------------------------------------------------------------------
# Interaction / assertion
# ---------------------------------------------------------------------------


class InteractionError(NavigationError):
    """A browser action on a located element raised.

    Attributes:
        identifier: Selector that located the element.
        action: Short name of the failed action (``click``, ``send_keys``...).
    """

    def __init__(self, identifier: str, action: str, detail: str = "") -> None:
        self.identifier = identifier
        self.action = action
        message = f"{action} failed on element {identifier}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class AssertionFailure(NavigationError):
    """An assertion on a located element did not hold."""


class TextMismatchError(AssertionFailure):
    """Rendered element text differs from the expected text."""

    def __init__(self, identifier: str, expected: str, actual: str | None) -> None:
        self.identifier = identifier
        self.expected = expected
        self.actual = actual
        super().__init__(f"assertion failure: expected '{expected}' found '{actual}'")


class ElementDisabledError(AssertionFailure):
    """The element reports itself as not interactable."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Element {identifier} is not enabled")


# ---------------------------------------------------------------------------
# Waits
# ---------------------------------------------------------------------------


class WaitTimeoutError(NavigationError):
    """A wait condition did not hold before the session timeout elapsed."""

    def __init__(self, message: str, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms. {message}")


# ---------------------------------------------------------------------------
# Screenshots
# ---------------------------------------------------------------------------


class ScreenshotError(NavigationError):
    """Capturing, naming, persisting or validating a screenshot failed."""


class InvalidFileNameError(ScreenshotError):
    """A captured file name has no usable name/extension split."""

    def __init__(self, raw: str | None) -> None:
        self.raw = raw
        if raw is None or not raw.strip():
            super().__init__("Invalid or empty file name")
        else:
            super().__init__(f"File name must contain a valid name and extension: {raw!r}")


class InvalidScreenshotError(ScreenshotError):
    """A screenshot record failed validation."""


class ScreenshotPersistError(ScreenshotError):
    """The captured file could not be copied to its target location."""

    def __init__(self, target: str, detail: str = "") -> None:
        self.target = target
        message = f"Could not write screenshot to {target}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Scrolling
# ---------------------------------------------------------------------------


class ScrollError(NavigationError):
    """The scroll-until-end loop aborted.

    Attributes:
        selector: Selector of the scrolled container.
        partial_screenshots: Screenshots captured before the abort, in
            chronological order.
    """

    def __init__(
        self,
        selector: str,
        detail: str,
        partial_screenshots: tuple[Screenshot, ...] = (),
    ) -> None:
        self.selector = selector
        self.partial_screenshots = tuple(partial_screenshots)
        super().__init__(f"Scrolling {selector} to the end failed: {detail}")


class ScrollLimitError(ScrollError):
    """The container kept moving after the configured maximum number of steps."""

    def __init__(
        self,
        selector: str,
        max_steps: int,
        partial_screenshots: tuple[Screenshot, ...] = (),
    ) -> None:
        self.max_steps = max_steps
        super().__init__(
            selector,
            f"offset still changing after {max_steps} steps",
            partial_screenshots,
        )
