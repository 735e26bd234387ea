"""Unit tests for challenge detection and the bypass waiter."""

import logging

import pytest

from bazaar.errors import TimeoutFailure
from bazaar.utils.challenge_handler import (
    ChallengeCheck,
    ChallengeDetector,
    ChallengeState,
    classify_challenge,
)

SITE = "https://www.sahibinden.com/"
CHALLENGE_URL = "https://www.sahibinden.com/cdn-cgi/challenge-platform/h/b"


def challenged(page):
    page.set_location(SITE, "Just a moment...")


def real_site(page):
    page.set_location(SITE, "sahibinden.com - Satılık, Kiralık, 2.El")


@pytest.fixture
def detector(page, waiter):
    return ChallengeDetector(page, "sahibinden.com", waiter)


class TestClassifyChallenge:
    """Tests for the pure marker classifier."""

    @pytest.mark.parametrize(
        "url, title, expected",
        [
            (CHALLENGE_URL, "", "url:challenge"),
            ("https://www.sahibinden.com/waiting-room", "", "url:waiting"),
            (SITE, "Just a moment...", "title:just a moment"),
            (SITE, "Attention Required! | Cloudflare", "title:cloudflare"),
            (SITE, "sahibinden.com", None),
            (SITE, None, None),
        ],
    )
    def test_markers(self, url, title, expected):
        assert classify_challenge(url, title) == expected


class TestChallengeDetector:

    def test_normal_page(self, page, detector):
        real_site(page)
        assert detector.check_state() is ChallengeState.NORMAL
        assert detector.is_challenged() is False

    def test_title_marker_is_challenged(self, page, detector):
        challenged(page)
        assert detector.check_state() is ChallengeState.CHALLENGED

    def test_cleared_after_challenge_passes(self, page, detector):
        challenged(page)
        assert detector.check_state() is ChallengeState.CHALLENGED

        real_site(page)
        assert detector.check_state() is ChallengeState.CLEARED

    def test_state_follows_live_page(self, page, detector):
        """A challenge reappearing after clearance reports CHALLENGED again."""
        challenged(page)
        detector.check_state()
        real_site(page)
        detector.check_state()
        challenged(page)

        assert detector.check_state() is ChallengeState.CHALLENGED

    def test_inspect_records_marker(self, page, detector):
        page.set_location(CHALLENGE_URL, "")

        check = detector.inspect()

        assert isinstance(check, ChallengeCheck)
        assert check.marker == "url:challenge"
        assert check.to_dict()["state"] == "challenged"

    def test_is_on_target_page(self, page, detector, caplog):
        real_site(page)
        assert detector.is_on_target_page() is True

        page.set_location(CHALLENGE_URL)
        with caplog.at_level(logging.WARNING):
            assert detector.is_on_target_page() is False
        assert "Still on challenge" in caplog.text

        page.set_location("https://example.com/")
        assert detector.is_on_target_page() is False


class TestWaitForClear:
    """Challenge that clears at t=2s, checked against different budgets."""

    def test_returns_normal_without_waiting(self, page, detector, clock):
        real_site(page)

        assert detector.wait_for_clear(5) is ChallengeState.NORMAL
        assert clock.sleeps == []

    def test_clears_within_budget(self, page, detector, clock):
        challenged(page)
        page.schedule(2.0, real_site)

        assert detector.wait_for_clear(5) is ChallengeState.CLEARED
        assert clock.now == pytest.approx(2.0)

    def test_times_out_before_clearance(self, page, detector, clock):
        challenged(page)
        page.schedule(2.0, real_site)

        with pytest.raises(TimeoutFailure) as exc_info:
            detector.wait_for_clear(1)

        assert exc_info.value.context["title"] == "Just a moment..."
        assert exc_info.value.context["marker"] == "title:just a moment"
        assert clock.now == pytest.approx(1.0)

    def test_never_clearing_challenge_fails(self, page, detector):
        challenged(page)

        with pytest.raises(TimeoutFailure):
            detector.wait_for_clear(3)

        assert detector.check_state() is ChallengeState.CHALLENGED

    def test_announces_manual_intervention(self, page, detector, caplog):
        challenged(page)
        page.schedule(0.5, real_site)

        with caplog.at_level(logging.WARNING):
            detector.wait_for_clear(5)

        assert "CHALLENGE DETECTED" in caplog.text
        assert "USER ACTION REQUIRED" in caplog.text
