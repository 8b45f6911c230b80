"""navproto test configuration — shared fixtures for unit tests.

Playwright is never launched: pages and locators are ``MagicMock`` objects
wired up by the ``dom`` fixture.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from navproto.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def shots_dir(tmp_path: Path) -> Path:
    return tmp_path / "shots"


@pytest.fixture()
def settings(shots_dir: Path):
    """Settings with no real delays and screenshots under *tmp_path*."""
    from navproto.settings.config import Settings

    return Settings(
        screenshots={"output_dir": str(shots_dir)},
        scroll={"settle_delay_ms": 0, "max_steps": 0},
        highlight={"duration_ms": 0},
    )


# ---------------------------------------------------------------------------
# Mock Playwright page
# ---------------------------------------------------------------------------


def _write_fake_png(path: str, full_page: bool = False) -> bytes:
    data = b"\x89PNG\r\n\x1a\nfake"
    Path(path).write_bytes(data)
    return data


@pytest.fixture()
def page() -> MagicMock:
    """A mock Playwright ``Page`` whose ``screenshot`` writes a small file."""
    page = MagicMock(name="page")
    page.screenshot.side_effect = _write_fake_png
    return page


class FakeDom:
    """Maps selectors to lists of mock elements behind ``page.locator``.

    ``page.locator(selector).first`` is the first registered element, or a
    mock whose ``wait_for`` times out when nothing is registered.
    ``page.locator(selector).all()`` reads the registry at call time, so
    tests can change the DOM between polls.
    """

    def __init__(self, page: MagicMock) -> None:
        self.page = page
        self.nodes: dict[str, list[MagicMock]] = {}
        page.locator.side_effect = self._locator

    def add(self, selector: str, *elements: MagicMock) -> MagicMock:
        self.nodes[selector] = list(elements)
        return elements[0] if elements else None

    def remove(self, selector: str) -> None:
        self.nodes.pop(selector, None)

    def _locator(self, selector: str) -> MagicMock:
        loc = MagicMock(name=f"locator({selector})")
        matches = self.nodes.get(selector, [])
        if matches:
            loc.first = matches[0]
        else:
            missing = MagicMock(name=f"missing({selector})")
            missing.wait_for.side_effect = PlaywrightTimeout(f"Timeout waiting for {selector}")
            loc.first = missing
        loc.all.side_effect = lambda: list(self.nodes.get(selector, []))
        loc.count.side_effect = lambda: len(self.nodes.get(selector, []))
        return loc


@pytest.fixture()
def dom(page: MagicMock) -> FakeDom:
    return FakeDom(page)


@pytest.fixture()
def make_element():
    """Factory for mock Playwright locators pinned to one element."""

    def _make(
        text: str = "",
        *,
        visible: bool = True,
        enabled: bool = True,
        attributes: dict[str, str] | None = None,
        name: str = "element",
    ) -> MagicMock:
        el = MagicMock(name=name)
        el.is_visible.return_value = visible
        el.is_enabled.return_value = enabled
        el.inner_text.return_value = text
        attrs = dict(attributes or {})
        el.get_attribute.side_effect = lambda attr, timeout=None: attrs.get(attr)
        return el

    return _make


@pytest.fixture()
def session(page: MagicMock, settings):
    """A session with a short timeout and fast polling."""
    from navproto.browser.session import BrowserSession

    return BrowserSession(page=page, timeout_ms=50, poll_interval_ms=1, settings=settings)


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that drive a real browser")
    config.addinivalue_line("markers", "slow: marks tests that take more than a few seconds")
