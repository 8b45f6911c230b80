"""navproto — fluent, immutable navigation chains over a Playwright page."""

from __future__ import annotations

from navproto.browser.session import BrowserSession
from navproto.browser.waits import WaitCondition, WaitFlag
from navproto.models import Located, NavigationResult, NotFetched, Screenshot, VisibilityFilter
from navproto.protocol import NavigationProtocol

try:
    from importlib.metadata import version

    __version__ = version("navproto")
except Exception:
    __version__ = "0.0.0"

__all__ = [
    "BrowserSession",
    "Located",
    "NavigationProtocol",
    "NavigationResult",
    "NotFetched",
    "Screenshot",
    "VisibilityFilter",
    "WaitCondition",
    "WaitFlag",
]
