"""Terminal output of a navigation chain."""

from __future__ import annotations

from dataclasses import dataclass, field

from navproto.models.outcome import Located, NotFetched
from navproto.models.screenshot import Screenshot


@dataclass(frozen=True)
class NavigationResult:
    """Final element outcome and screenshot history of a successful chain."""

    element: Located | NotFetched
    screenshots: tuple[Screenshot, ...] = field(default_factory=tuple)

    @property
    def screenshot_names(self) -> list[str]:
        return [s.name for s in self.screenshots]

    def without_screenshot(self, name: str) -> tuple[Screenshot, ...]:
        """Return the screenshots whose name is not *name*."""
        return tuple(s for s in self.screenshots if s.name != name)
