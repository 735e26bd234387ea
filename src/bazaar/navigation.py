"""
Composed "open the site" flow.

open URL -> clear any challenge -> confirm the resting URL -> dismiss the
one-time consent banner. Each step starts from the previous step's
postcondition; any failure aborts the whole flow with ``NavigationFailure``.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from bazaar.config import HarnessConfig
from bazaar.core.interactions import Interactions
from bazaar.core.locators import Locator
from bazaar.core.waits import Clickable, UrlMatches, Waiter
from bazaar.errors import BazaarError, NavigationFailure, TimeoutFailure
from bazaar.logging_config import log_banner
from bazaar.utils.challenge_handler import (
    CHALLENGE_URL_MARKERS,
    ChallengeDetector,
    ChallengeState,
)

logger = logging.getLogger(__name__)

COOKIE_ACCEPT_ALL = Locator.id("onetrust-accept-btn-handler")

# Pause after each scroll so lazily rendered banners can appear
SCROLL_SETTLE_SECONDS = 0.3


def domain_of(url: str) -> str:
    """'https://www.sahibinden.com/x' -> 'sahibinden.com'"""
    host = urlparse(url).hostname or ""
    return host[4:] if host.startswith("www.") else host


@dataclass
class NavigationResult:
    """Outcome of the composed navigation flow."""
    success: bool
    final_url: Optional[str]
    challenge_state: Optional[ChallengeState] = None
    elapsed_seconds: float = 0.0
    banner_dismissed: bool = False
    message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "final_url": self.final_url,
            "challenge_state": self.challenge_state.value if self.challenge_state else None,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "banner_dismissed": self.banner_dismissed,
            "message": self.message,
        }


class SiteNavigator:
    """
    Drives a page from a cold start to a stable, consent-free landing page.

    Usage:
        navigator = SiteNavigator.from_config(page, config, interactions)
        result = navigator.navigate()
    """

    def __init__(
        self,
        page: Page,
        base_url: str,
        interactions: Optional[Interactions] = None,
        target_domain: Optional[str] = None,
        challenge_timeout: float = 30.0,
        page_ready_timeout: float = 30.0,
        banner_timeout: float = 5.0,
        consent_locator: Locator = COOKIE_ACCEPT_ALL,
        settle_seconds: float = SCROLL_SETTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.page = page
        self.base_url = base_url
        self.interactions = interactions or Interactions(page)
        self.waiter: Waiter = self.interactions.waiter
        self.target_domain = target_domain or domain_of(base_url)
        self.challenge_timeout = challenge_timeout
        self.page_ready_timeout = page_ready_timeout
        self.banner_timeout = banner_timeout
        self.consent_locator = consent_locator
        self.settle_seconds = settle_seconds
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        page: Page,
        config: HarnessConfig,
        interactions: Optional[Interactions] = None,
    ) -> "SiteNavigator":
        return cls(
            page,
            config.base_url,
            interactions=interactions,
            challenge_timeout=config.challenge_wait,
            page_ready_timeout=config.page_ready_timeout,
            banner_timeout=config.cookie_banner_timeout,
        )

    def navigate(self) -> NavigationResult:
        """
        Open the site and bring it to a stable state.

        Returns:
            NavigationResult with success=True and the final URL

        Raises:
            NavigationFailure: a step failed; ``result`` carries the last URL
        """
        started = self._clock()
        logger.info(f"Navigating to {self.base_url} with automatic overlay handling...")

        # Step 1: request navigation
        try:
            self.page.goto(self.base_url)
        except PlaywrightError as e:
            raise self._abort("open", f"Failed to open {self.base_url}", started) from e

        # Step 2: challenge detection and bypass wait
        detector = ChallengeDetector(self.page, self.target_domain, self.waiter)
        state: Optional[ChallengeState] = None
        try:
            state = detector.check_state()
            if state is ChallengeState.CHALLENGED:
                state = detector.wait_for_clear(self.challenge_timeout)
                logger.info("✓ Challenge verification completed successfully")
            else:
                logger.info("✓ No challenge detected")
        except (TimeoutFailure, PlaywrightError) as e:
            raise self._abort(
                "challenge",
                "Failed to bypass challenge verification",
                started,
                state,
            ) from e

        # Step 3: confirm the resting URL; catches redirects the title check misses
        try:
            self.waiter.until(
                UrlMatches(self.target_domain, CHALLENGE_URL_MARKERS),
                self.page_ready_timeout,
            )
        except TimeoutFailure as e:
            raise self._abort(
                "page_load", f"{self.target_domain} page load timeout", started, state
            ) from e
        logger.info(f"Page loaded successfully. Current URL: {self.waiter.current_url()}")

        # Step 4: optional consent banner
        try:
            dismissed = self.dismiss_consent_banner()
        except (BazaarError, PlaywrightError) as e:
            raise self._abort(
                "consent_banner", "Consent banner could not be dismissed", started, state
            ) from e

        result = NavigationResult(
            success=True,
            final_url=self.waiter.current_url(),
            challenge_state=state,
            elapsed_seconds=self._clock() - started,
            banner_dismissed=dismissed,
        )
        logger.info(f"✓ Successfully navigated to {self.target_domain}")
        return result

    def dismiss_consent_banner(self) -> bool:
        """
        Accept the consent banner if it shows up within the short banner timeout.

        Returns:
            True if the banner was clicked, False if it never appeared
        """
        logger.debug("Checking for cookie banner...")

        self.interactions.scroll_to("bottom")
        self._sleep(self.settle_seconds)
        self.interactions.scroll_to("top")
        self._sleep(self.settle_seconds)

        try:
            self.waiter.until(Clickable(self.consent_locator), self.banner_timeout)
        except TimeoutFailure:
            logger.debug("Cookie banner not found (may already be dismissed or not present)")
            return False

        self.interactions.click(self.consent_locator, "Cookie Accept Button", self.banner_timeout)
        logger.info("✓ Cookie banner dismissed successfully")
        return True

    def _abort(
        self,
        step: str,
        message: str,
        started: float,
        state: Optional[ChallengeState] = None,
    ) -> NavigationFailure:
        final_url = self.waiter.current_url()
        result = NavigationResult(
            success=False,
            final_url=final_url,
            challenge_state=state,
            elapsed_seconds=self._clock() - started,
            message=message,
        )
        screenshot = self.interactions.capture_screenshot(f"navigation_{step}")
        log_banner(
            logger,
            f"NAVIGATION FAILED at step '{step}'",
            message,
            f"Final URL: {final_url}",
            level=logging.ERROR,
        )
        failure = NavigationFailure(step, message, result)
        failure.with_context(screenshot=str(screenshot) if screenshot else None)
        return failure
