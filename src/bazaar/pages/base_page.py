"""Base page object shared by every page of the site."""
import logging
from pathlib import Path
from typing import Optional, Union

from playwright.sync_api import Page

from bazaar.core.interactions import Interactions, Target
from bazaar.core.locators import Locator
from bazaar.core.waits import Waiter

logger = logging.getLogger(__name__)


class BasePage:
    """
    Common page operations.

    Page objects own their locators as immutable class attributes and
    hand them to the interaction layer; no element handle outlives a call.
    """

    def __init__(self, page: Page, interactions: Optional[Interactions] = None):
        self.page = page
        self.interactions = interactions or Interactions(page)
        self.waiter: Waiter = self.interactions.waiter
        logger.debug(f"Initialized page: {type(self).__name__}")

    @property
    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def navigate_to(self, url: str) -> None:
        logger.info(f"Navigating to: {url}")
        self.page.goto(url)

    def click_element(self, locator: Locator, name: str, timeout: Optional[float] = None) -> None:
        self.interactions.click(locator, name, timeout)

    def type_text(self, target: Target, text: str, name: Optional[str] = None) -> None:
        self.interactions.type_text(target, text, name)

    def read_text(self, target: Target, name: Optional[str] = None) -> str:
        return self.interactions.read_text(target, name)

    def is_element_displayed(self, locator: Locator, name: str) -> bool:
        return self.interactions.is_displayed(locator, name)

    def wait_for_visibility(self, locator: Locator, timeout: Optional[float] = None):
        logger.debug(f"Waiting for element visibility using locator: {locator}")
        return self.waiter.for_visible(locator, timeout)

    def wait_for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> bool:
        logger.debug(f"Waiting for URL to contain: {fragment}")
        return self.waiter.for_url_contains(fragment, timeout)

    def wait_for_url_to_be(self, url: str, timeout: Optional[float] = None) -> bool:
        logger.debug(f"Waiting for URL to be: {url}")
        return self.waiter.for_url_to_be(url, timeout)

    def scroll_page(self, position: Union[str, int]) -> None:
        self.interactions.scroll_to(position)

    def take_screenshot(self, name: str) -> Optional[Path]:
        return self.interactions.capture_screenshot(name)
