"""
Anti-bot interstitial detection and bypass waiting.

This module observes whether the browser is parked on a challenge page
(Cloudflare "Just a moment...", waiting rooms, ...) and blocks until the
challenge clears, either on its own or through an operator solving it in
the visible browser window.

It never tries to solve a challenge. The waiter blocks up to the
configured timeout and then fails with a diagnostic.

Usage:
    detector = ChallengeDetector(page, "sahibinden.com", waiter)
    if detector.check_state() is ChallengeState.CHALLENGED:
        detector.wait_for_clear(timeout=30)
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple

from playwright.sync_api import Page

from bazaar.core.waits import CheckResult, Waiter, WaitCondition
from bazaar.errors import TimeoutFailure
from bazaar.logging_config import log_banner

logger = logging.getLogger(__name__)


# =============================================================================
# Challenge Markers
# =============================================================================

# URL segments that mark an interstitial
CHALLENGE_URL_MARKERS: Tuple[str, ...] = (
    "challenge",
    "waiting",
)

# Lower-cased phrases found in interstitial page titles
CHALLENGE_TITLE_PHRASES: Tuple[str, ...] = (
    "cloudflare",
    "just a moment",
)


class ChallengeState(Enum):
    NORMAL = "normal"
    CHALLENGED = "challenged"
    CLEARED = "cleared"


@dataclass
class ChallengeCheck:
    """One observation of the page's challenge status."""
    state: ChallengeState
    url: str
    title: str
    marker: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "url": self.url,
            "title": self.title,
            "marker": self.marker,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


# =============================================================================
# Challenge Detection
# =============================================================================

def classify_challenge(
    url: str,
    title: str,
    url_markers: Iterable[str] = CHALLENGE_URL_MARKERS,
    title_phrases: Iterable[str] = CHALLENGE_TITLE_PHRASES,
) -> Optional[str]:
    """
    Name the interstitial marker matched by ``url``/``title``, if any.

    Args:
        url: Current page URL
        title: Current page title

    Returns:
        "url:<marker>" or "title:<phrase>", or None for a normal page
    """
    for marker in url_markers:
        if marker in url:
            return f"url:{marker}"

    lowered = (title or "").lower()
    for phrase in title_phrases:
        if phrase in lowered:
            return f"title:{phrase}"

    return None


class ChallengeDetector:
    """
    Challenge state machine for a single page load.

    ``check_state`` re-reads URL and title on every call. The only thing
    remembered between calls is whether a challenge has been observed,
    which is what separates CLEARED from NORMAL.
    """

    def __init__(
        self,
        page: Page,
        target_domain: str,
        waiter: Optional[Waiter] = None,
        url_markers: Iterable[str] = CHALLENGE_URL_MARKERS,
        title_phrases: Iterable[str] = CHALLENGE_TITLE_PHRASES,
    ):
        self.page = page
        self.target_domain = target_domain
        self.waiter = waiter or Waiter(page)
        self.url_markers = tuple(url_markers)
        self.title_phrases = tuple(title_phrases)
        self._challenge_seen = False

    def inspect(self) -> ChallengeCheck:
        """Observe the live page and classify it."""
        url = self.page.url
        title = self.page.title()
        marker = classify_challenge(url, title, self.url_markers, self.title_phrases)

        if marker:
            self._challenge_seen = True
            state = ChallengeState.CHALLENGED
        elif self._challenge_seen:
            state = ChallengeState.CLEARED
        else:
            state = ChallengeState.NORMAL

        logger.debug(f"Challenge state {state.value}. URL: {url}, Title: {title}")
        return ChallengeCheck(state=state, url=url, title=title, marker=marker)

    def check_state(self) -> ChallengeState:
        return self.inspect().state

    def is_challenged(self) -> bool:
        return self.check_state() is ChallengeState.CHALLENGED

    def is_on_target_page(self) -> bool:
        """URL is on the target domain and carries no interstitial marker."""
        url = self.page.url
        on_target = self.target_domain in url and not any(m in url for m in self.url_markers)
        if not on_target:
            logger.warning(f"URL check failed. Still on challenge or other page: {url}")
        return on_target

    def wait_for_clear(self, timeout: float) -> ChallengeState:
        """
        Block until the page is no longer challenged.

        Args:
            timeout: Seconds allowed for automatic or manual clearance

        Returns:
            CLEARED if a challenge was passed, NORMAL if none was ever seen

        Raises:
            TimeoutFailure: still challenged when the timeout elapsed
        """
        first = self.inspect()
        if first.state is not ChallengeState.CHALLENGED:
            return first.state

        announce_manual_intervention(first.url, timeout)

        try:
            state = self.waiter.until(ChallengeCleared(self), timeout)
        except TimeoutFailure as e:
            logger.error(f"Challenge verification timeout after {timeout} seconds")
            e.with_context(marker=first.marker, title=first.title)
            raise

        logger.info("Challenge verification completed successfully!")
        return state


class ChallengeCleared(WaitCondition):
    """Detector no longer reports CHALLENGED."""

    def __init__(self, detector: ChallengeDetector):
        self.detector = detector
        self.description = f"challenge on {detector.target_domain!r} to clear"

    def check(self, page: Page) -> CheckResult:
        check = self.detector.inspect()
        observed = f"{check.state.value} (url={check.url}, title={check.title!r})"
        if check.state is ChallengeState.CHALLENGED:
            return None, observed
        return check.state, observed


# =============================================================================
# Human Intervention
# =============================================================================

def announce_manual_intervention(url: str, timeout: float) -> None:
    """Tell the operator a challenge is waiting in the browser window."""
    log_banner(
        logger,
        "CHALLENGE DETECTED",
        "Waiting for automatic/manual verification...",
        "USER ACTION REQUIRED: complete the verification in the browser window",
        f"Current URL: {url}",
        f"Timeout: {timeout} seconds",
        level=logging.WARNING,
    )
