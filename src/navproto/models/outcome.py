"""Element outcome carried by a navigation chain.

An outcome is exactly one of ``NotFetched``, ``Located`` or ``Failed``.
Operations dispatch on the concrete type; there is no placeholder element.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from navproto.exceptions import NavigationError


class VisibilityFilter(str, Enum):
    """Which matches ``fetch`` accepts."""

    ANY = "any"
    VISIBLE = "visible"


@dataclass(frozen=True)
class NotFetched:
    """No element has been located yet."""

    def __str__(self) -> str:
        return "<not fetched>"


@dataclass(frozen=True)
class Located:
    """A located element and the selector that found it.

    ``element`` is a Playwright ``Locator`` pinned to the first match.
    """

    element: Any
    identifier: str

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class Failed:
    """The chain failed; ``cause`` is the first error it absorbed."""

    cause: NavigationError

    def __str__(self) -> str:
        return f"<failed: {self.cause}>"


ElementOutcome = Union[NotFetched, Located, Failed]
