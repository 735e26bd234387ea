"""Live: sorting and filtering on the refurbished phones listing."""

import pytest

from bazaar.config import settings
from bazaar.pages import YepyPage

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.live,
    pytest.mark.skipif(not settings.LIVE_TESTS, reason="live site tests need BAZAAR_LIVE=1"),
]


def assert_sorted(yepy_page, ascending):
    prices = yepy_page.get_all_prices()
    assert prices, "Price list should not be empty"
    assert yepy_page.are_prices_sorted(ascending), (
        f"Prices should be sorted in {'ascending' if ascending else 'descending'} order: {prices}"
    )


def assert_first_within_limit(yepy_page, limit, is_max):
    prices = yepy_page.get_all_prices()
    assert prices, "Price list should not be empty"
    bound = "at most" if is_max else "at least"
    assert yepy_page.is_first_price_within_limit(limit, is_max), (
        f"First price {prices[0]} should be {bound} {limit}"
    )


class TestPriceSorting:

    def test_price_order_ascending(self, yepy_page):
        yepy_page.apply_price_sorting(ascending=True)
        assert_sorted(yepy_page, ascending=True)

    def test_price_order_descending(self, yepy_page):
        yepy_page.apply_price_sorting(ascending=False)
        assert_sorted(yepy_page, ascending=False)


class TestPriceFilters:

    def test_max_price_filter_with_descending_sort(self, yepy_page):
        yepy_page.apply_price_filter(9000, is_max=True)
        yepy_page.apply_price_sorting(ascending=False)
        assert_first_within_limit(yepy_page, 9000, is_max=True)

    def test_min_price_filter_with_ascending_sort(self, yepy_page):
        yepy_page.apply_price_filter(5000, is_max=False)
        yepy_page.apply_price_sorting(ascending=True)
        assert_first_within_limit(yepy_page, 5000, is_max=False)


class TestAttributeFilters:

    def test_multiple_filters_are_applied(self, yepy_page):
        yepy_page.click_checkbox(YepyPage.CONDITION_GOOD_CHECKBOX, "İyi Durum")
        yepy_page.click_checkbox(YepyPage.COLOR_GOLD_CHECKBOX, "Altın Renk")
        yepy_page.click_search_button()
        yepy_page.wait_for_url_contains("/apple-cep-telefonu?")

        yepy_page.open_first_product()

        assert yepy_page.is_element_displayed(YepyPage.DETAIL_CONDITION_GOOD, "İyi durumda")
        assert yepy_page.is_element_displayed(YepyPage.DETAIL_COLOR_GOLD, "Altın rengi")
