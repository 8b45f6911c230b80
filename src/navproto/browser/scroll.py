"""Scroll a container to its end, one screenshot per step.

Content length is unknown up front and may load lazily, so the loop stops on
a stability signal: two consecutive identical ``scrollTop`` reads.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from navproto.browser.actions import press_key, read_scroll_offset
from navproto.browser.locator import find_element
from navproto.browser.screenshots import take_screenshot
from navproto.exceptions import ScrollError, ScrollLimitError
from navproto.models.outcome import Located

if TYPE_CHECKING:
    from navproto.browser.session import BrowserSession
    from navproto.models.screenshot import Screenshot

logger = logging.getLogger(__name__)

PAGE_DOWN = "PageDown"
ARROW_DOWN = "ArrowDown"


def scroll_to_end(
    session: BrowserSession,
    selector: str,
    name: str,
    folder: Path | str | None = None,
) -> tuple[Screenshot, ...]:
    """Page down through the container matching *selector* until it stops moving.

    Each step presses ``PageDown``, saves ``<name>-<step>``, waits for the
    settle delay and reads the container offset.  When the offset repeats,
    one ``ArrowDown`` nudge covers a page-down that overshot the remaining
    distance, and ``<name>-<step>`` is captured again (same file, same slot).

    Returns:
        Screenshots in chronological order, one per step.

    Raises:
        ElementNotFoundError: The container could not be located.
        ScrollError: Any step failed; carries the screenshots taken so far.
        ScrollLimitError: ``scroll.max_steps`` is set and was exceeded.
    """
    container = Located(element=find_element(session, selector), identifier=selector)
    settle_s = session.settings.scroll.settle_delay_ms / 1000
    max_steps = session.settings.scroll.max_steps

    shots: list[Screenshot] = []
    last_offset = -1
    step = 1
    try:
        while True:
            if max_steps and step > max_steps:
                raise ScrollLimitError(selector, max_steps, tuple(shots))

            press_key(session, container, PAGE_DOWN)
            shots.append(take_screenshot(session, f"{name}-{step}", folder))
            time.sleep(settle_s)
            offset = read_scroll_offset(container)
            logger.debug("Scroll step %d on %s: offset %d (previous %d)", step, selector, offset, last_offset)

            if offset == last_offset:
                press_key(session, container, ARROW_DOWN)
                shots[-1] = take_screenshot(session, f"{name}-{step}", folder)
                logger.info("Reached end of %s after %d step(s)", selector, step)
                return tuple(shots)

            last_offset = offset
            step += 1
    except ScrollError:
        raise
    except Exception as exc:
        raise ScrollError(selector, str(exc), tuple(shots)) from exc
