"""Unit tests for wait conditions and session polling."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from navproto.browser.session import BrowserSession
from navproto.browser.waits import WaitCondition, WaitFlag
from navproto.exceptions import WaitTimeoutError


class TestWaitConditionMessages:
    def test_present_message(self):
        assert WaitCondition.present("#spinner").message == (
            "Waiting for element identified by #spinner to appear."
        )

    def test_absent_message(self):
        assert WaitCondition.absent("#spinner").message == (
            "Waiting for element identified by #spinner to stop appearing."
        )

    def test_constructors_set_flag(self):
        assert WaitCondition.present("a").flag is WaitFlag.IS_PRESENT
        assert WaitCondition.absent("a").flag is WaitFlag.IS_ABSENT


class TestWaitConditionEvaluate:
    def test_present_succeeds_when_matches_exist(self, session, dom, make_element):
        dom.add("#toast", make_element())

        WaitCondition.present("#toast").evaluate(session)

    def test_absent_succeeds_when_nothing_matches(self, session, dom):
        WaitCondition.absent("#spinner").evaluate(session)

    def test_present_times_out_with_message(self, session, dom):
        with pytest.raises(WaitTimeoutError, match="#toast to appear") as exc_info:
            WaitCondition.present("#toast").evaluate(session)
        assert exc_info.value.timeout_ms == 50

    def test_absent_times_out_with_message(self, session, dom, make_element):
        dom.add("#spinner", make_element())

        with pytest.raises(WaitTimeoutError, match="#spinner to stop appearing"):
            WaitCondition.absent("#spinner").evaluate(session)

    def test_absent_succeeds_once_element_disappears(self, page, settings, dom, make_element):
        dom.add("#spinner", make_element())
        session = BrowserSession(page=page, timeout_ms=5_000, poll_interval_ms=1, settings=settings)
        polls = {"n": 0}
        original = dom.nodes

        def disappearing(selector):
            polls["n"] += 1
            if polls["n"] >= 3:
                original.pop("#spinner", None)
            return dom._locator(selector)

        page.locator.side_effect = disappearing

        WaitCondition.absent("#spinner").evaluate(session)

        assert polls["n"] == 3


class TestPollUntil:
    def test_first_evaluation_is_immediate(self, session):
        predicate = MagicMock(return_value=True)

        with patch("navproto.browser.session.time.sleep") as sleep:
            session.poll_until(predicate, "ready")

        predicate.assert_called_once_with()
        sleep.assert_not_called()

    def test_sleeps_poll_interval_between_evaluations(self, page, settings):
        session = BrowserSession(page=page, timeout_ms=10_000, poll_interval_ms=250, settings=settings)
        predicate = MagicMock(side_effect=[False, False, True])

        with patch("navproto.browser.session.time.sleep") as sleep:
            session.poll_until(predicate, "ready")

        assert predicate.call_count == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(0.25)

    def test_zero_timeout_evaluates_once(self, page, settings):
        session = BrowserSession(page=page, timeout_ms=0, poll_interval_ms=1, settings=settings)
        predicate = MagicMock(return_value=False)

        with pytest.raises(WaitTimeoutError, match="never"):
            session.poll_until(predicate, "never")
        predicate.assert_called_once_with()

    def test_predicate_errors_propagate(self, session):
        predicate = MagicMock(side_effect=RuntimeError("page closed"))

        with pytest.raises(RuntimeError, match="page closed"):
            session.poll_until(predicate, "ready")


class TestSessionFromPage:
    def test_uses_browser_settings(self, page):
        from navproto.settings.config import Settings

        settings = Settings(browser={"timeout_ms": 1234, "poll_interval_ms": 56})
        session = BrowserSession.from_page(page, settings)

        assert session.page is page
        assert session.timeout_ms == 1234
        assert session.poll_interval_ms == 56
        assert session.settings is settings
