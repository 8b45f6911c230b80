"""Presence / absence wait conditions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from navproto.browser.locator import query_elements

if TYPE_CHECKING:
    from navproto.browser.session import BrowserSession

logger = logging.getLogger(__name__)


class WaitFlag(str, Enum):
    """Direction a wait condition awaits."""

    IS_PRESENT = "is_present"
    IS_ABSENT = "is_absent"


@dataclass(frozen=True)
class WaitCondition:
    """Block until *selector* matches something (``IS_PRESENT``) or nothing (``IS_ABSENT``)."""

    selector: str
    flag: WaitFlag

    @classmethod
    def present(cls, selector: str) -> "WaitCondition":
        return cls(selector, WaitFlag.IS_PRESENT)

    @classmethod
    def absent(cls, selector: str) -> "WaitCondition":
        return cls(selector, WaitFlag.IS_ABSENT)

    @property
    def message(self) -> str:
        if self.flag is WaitFlag.IS_PRESENT:
            return f"Waiting for element identified by {self.selector} to appear."
        return f"Waiting for element identified by {self.selector} to stop appearing."

    def is_satisfied(self, session: BrowserSession) -> bool:
        """Single poll: does the condition hold right now?"""
        matches = query_elements(session, self.selector)
        if self.flag is WaitFlag.IS_PRESENT:
            return len(matches) > 0
        return len(matches) == 0

    def evaluate(self, session: BrowserSession) -> None:
        """Poll until the condition holds.

        Raises:
            WaitTimeoutError: The condition did not hold within the session timeout.
        """
        logger.debug(self.message)
        session.poll_until(lambda: self.is_satisfied(session), self.message)
