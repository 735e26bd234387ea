"""
Page object for the refurbished-phone (Yepy) listing.

Holds the listing's locators and the page-level operations tests compose:
sorting, price filters, attribute checkboxes, and reading the price column.
"""
import logging
from typing import List, Optional

from playwright.sync_api import Page

from bazaar.core.interactions import Interactions
from bazaar.core.locators import Locator
from bazaar.pages.base_page import BasePage
from bazaar.prices import DEFAULT_CURRENCY, extract_prices, first_price, first_within_limit, is_sorted

logger = logging.getLogger(__name__)


class YepyPage(BasePage):
    """Refurbished phones category and its search results."""

    DEVICE_SEARCH_BUTTON = Locator.xpath("//a[normalize-space(text())='Cihaz ara']")
    ADVANCED_SORTING_DROPDOWN = Locator.id("advancedSorting")
    SORT_PRICE_ASCENDING = Locator.xpath("//a[@title='Fiyat: Düşükten yükseğe']")
    SORT_PRICE_DESCENDING = Locator.xpath("//a[@title='Fiyat: Yüksekten düşüğe']")
    ALL_PRICE_ELEMENTS = Locator.xpath(
        "//div[contains(@class, 'searchResultsPriceValue')]"
        "//span[contains(@class, 'classified-price-container') or text()]"
    )
    PRICE_MAX_INPUT = Locator.css("input[name='price_max']")
    PRICE_MIN_INPUT = Locator.css("input[name='price_min']")
    SEARCH_BUTTON = Locator.xpath("//button[normalize-space(text())='Ara']")

    CONDITION_GOOD_CHECKBOX = Locator.xpath(
        "//div[@class='form-check'][.//label[normalize-space(text())='İyi']]//input[@type='checkbox']"
    )
    STORAGE_128GB_CHECKBOX = Locator.xpath(
        "//div[@class='form-check'][.//label[normalize-space(text())='128 GB']]//input[@type='checkbox']"
    )
    COLOR_GOLD_CHECKBOX = Locator.xpath(
        "//div[@class='form-check'][.//label[normalize-space(text())='Altın']]//input[@type='checkbox']"
    )

    # Real product links only; banner tiles in the grid are excluded
    FIRST_PRODUCT_LINK = Locator.xpath(
        "//div[contains(@class, 'refurbishment-content')]/ul/li[1]"
        "//a[contains(@class, 'refurbishment-classified-url')]"
    )
    DETAIL_CONDITION_GOOD = Locator.xpath(
        "//h3[@data-access='detail' and normalize-space(text())='İyi durumda']"
    )
    DETAIL_COLOR_GOLD = Locator.xpath(
        "//span[@data-access='selected-color' and normalize-space(text())='Altın']"
    )

    LISTING_PATH = "/yepy/yenilenmis-telefonlar"
    DETAIL_PATH = "/yepy/yenilenmis-telefonlar/detay/"

    SORT_FRAGMENTS = {True: "sorting=price_asc", False: "sorting=price_desc"}

    def __init__(
        self,
        page: Page,
        interactions: Optional[Interactions] = None,
        currency: str = DEFAULT_CURRENCY,
    ):
        super().__init__(page, interactions)
        self.currency = currency
        logger.info("Initialized YepyPage")

    # ------------------------------------------------------------------
    # Navigation within the category
    # ------------------------------------------------------------------

    def is_device_search_displayed(self) -> bool:
        return self.is_element_displayed(self.DEVICE_SEARCH_BUTTON, "Cihaz Ara Link")

    def open_device_search(self) -> None:
        self.click_element(self.DEVICE_SEARCH_BUTTON, "Cihaz Ara Link")
        self.wait_for_url_contains(self.LISTING_PATH)

    def open_first_product(self) -> None:
        self.click_element(self.FIRST_PRODUCT_LINK, "First Product")
        self.wait_for_url_contains(self.DETAIL_PATH)

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------

    def get_all_price_elements(self) -> list:
        logger.info("Finding all price elements on the page...")
        elements = self.page.locator(self.ALL_PRICE_ELEMENTS.selector).all()
        logger.info(f"Found {len(elements)} price elements")
        return elements

    def get_all_prices(self) -> List[float]:
        return extract_prices(self.get_all_price_elements(), self.currency)

    def get_first_price(self) -> Optional[float]:
        return first_price(self.get_all_prices())

    def are_prices_sorted(self, ascending: bool) -> bool:
        return is_sorted(self.get_all_prices(), ascending)

    def is_first_price_within_limit(self, limit: float, is_max: bool) -> bool:
        return first_within_limit(self.get_all_prices(), limit, is_max)

    # ------------------------------------------------------------------
    # Filters and sorting
    # ------------------------------------------------------------------

    def set_max_price(self, max_price: int) -> None:
        logger.info(f"Setting maximum price filter to: {max_price}")
        self.type_text(self.PRICE_MAX_INPUT, str(max_price), "Maximum price")

    def set_min_price(self, min_price: int) -> None:
        logger.info(f"Setting minimum price filter to: {min_price}")
        self.type_text(self.PRICE_MIN_INPUT, str(min_price), "Minimum price")

    def click_search_button(self) -> None:
        logger.info("Clicking search button to apply filters...")
        self.click_element(self.SEARCH_BUTTON, "Ara Button")

    def wait_for_price_in_url(self, price: int, is_max: bool) -> None:
        fragment = f"price_{'max' if is_max else 'min'}={price}"
        logger.info(f"Waiting for URL to contain: {fragment}")
        self.wait_for_url_contains(fragment)
        logger.info(f"✓ Price filter applied - URL contains {fragment}")

    def apply_price_sorting(self, ascending: bool) -> None:
        """Choose price ascending/descending from the sorting dropdown."""
        order = "ascending" if ascending else "descending"
        logger.info(f"Applying price sorting: {order}")

        self.click_element(self.ADVANCED_SORTING_DROPDOWN, "Gelişmiş Sıralama")
        if ascending:
            self.click_element(self.SORT_PRICE_ASCENDING, "Fiyat: Düşükten yükseğe")
        else:
            self.click_element(self.SORT_PRICE_DESCENDING, "Fiyat: Yüksekten düşüğe")
        self.wait_for_url_contains(self.SORT_FRAGMENTS[ascending])

        logger.info(f"✓ Price sorting applied: {order}")

    def apply_price_filter(self, price: int, is_max: bool) -> None:
        """Enter a min or max price, search, and wait for the URL to reflect it."""
        if is_max:
            self.set_max_price(price)
        else:
            self.set_min_price(price)

        self.click_search_button()
        self.wait_for_price_in_url(price, is_max)

    def click_checkbox(self, locator: Locator, name: str) -> None:
        logger.info(f"Clicking checkbox: {name}")
        self.click_element(locator, name)
