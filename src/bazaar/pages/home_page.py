"""Page object for the site's home page."""
import logging
from typing import Optional

from playwright.sync_api import Page

from bazaar.core.interactions import Interactions
from bazaar.core.locators import Locator
from bazaar.navigation import NavigationResult, SiteNavigator, domain_of
from bazaar.pages.base_page import BasePage
from bazaar.utils.challenge_handler import ChallengeDetector, ChallengeState

logger = logging.getLogger(__name__)


class HomePage(BasePage):
    """Landing page: entry point to the category tree."""

    YEPY_BUTTON = Locator.id("yepy-link-category-tree")

    YEPY_PATH = "/yepy"

    def __init__(self, page: Page, base_url: str, interactions: Optional[Interactions] = None):
        super().__init__(page, interactions)
        self.base_url = base_url
        self.domain = domain_of(base_url)
        logger.info(f"Initialized HomePage with base URL: {base_url}")

    def open(self) -> "HomePage":
        logger.info(f"Opening home page: {self.base_url}")
        self.navigate_to(self.base_url)
        return self

    def navigate(
        self,
        challenge_timeout: float = 30.0,
        page_ready_timeout: float = 30.0,
        banner_timeout: float = 5.0,
    ) -> NavigationResult:
        """Open the site, clear any challenge and dismiss the consent banner."""
        navigator = SiteNavigator(
            self.page,
            self.base_url,
            interactions=self.interactions,
            target_domain=self.domain,
            challenge_timeout=challenge_timeout,
            page_ready_timeout=page_ready_timeout,
            banner_timeout=banner_timeout,
        )
        return navigator.navigate()

    def challenge_state(self) -> ChallengeState:
        return ChallengeDetector(self.page, self.domain, self.waiter).check_state()

    def is_on_site_page(self) -> bool:
        """True once past any interstitial and on the real site."""
        logger.info(f"Verifying site page. Current URL: {self.current_url}")
        return ChallengeDetector(self.page, self.domain, self.waiter).is_on_target_page()

    def is_yepy_link_displayed(self) -> bool:
        return self.is_element_displayed(self.YEPY_BUTTON, "Yepy")

    def click_yepy_link(self) -> None:
        self.click_element(self.YEPY_BUTTON, "Yepy")
