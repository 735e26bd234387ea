"""Tests for price parsing and ordering checks."""

import logging

import pytest

from bazaar.errors import ParseFailure
from bazaar.prices import (
    extract_prices,
    first_price,
    first_within_limit,
    is_sorted,
    parse_price,
    parse_prices,
)


class FakePriceNode:
    def __init__(self, text):
        self.text = text

    def inner_text(self):
        return self.text


class TestParsePrice:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("4.999 TL", 4999.0),
            ("1.234,56 TL", 1234.56),
            ("12.500TL", 12500.0),
            ("  850 TL  ", 850.0),
            ("7.250 ₺", 7250.0),
            ("999", 999.0),
        ],
    )
    def test_localized_prices(self, text, expected):
        assert parse_price(text) == expected

    @pytest.mark.parametrize("text", ["Fiyat sorunuz", "TL", "1,2,3 TL", "abc"])
    def test_non_numeric_text_raises(self, text):
        with pytest.raises(ParseFailure) as exc_info:
            parse_price(text)
        assert exc_info.value.text == text

    def test_custom_currency(self):
        assert parse_price("1.500 USD", currency="USD") == 1500.0


class TestExtractPrices:

    def test_empty_texts_are_skipped(self):
        assert parse_prices(["4.999 TL", "", "   ", None, "5.100 TL"]) == [4999.0, 5100.0]

    def test_preserves_dom_order(self):
        nodes = [FakePriceNode("8.800 TL"), FakePriceNode("8.500 TL"), FakePriceNode("8.000 TL")]
        assert extract_prices(nodes) == [8800.0, 8500.0, 8000.0]

    def test_never_longer_than_input(self):
        nodes = [FakePriceNode(""), FakePriceNode("1 TL")]
        assert len(extract_prices(nodes)) <= len(nodes)

    def test_unparseable_node_fails_the_batch(self):
        with pytest.raises(ParseFailure):
            extract_prices(["4.999 TL", "Teklif ver"])


class TestIsSorted:

    def test_ascending(self):
        assert is_sorted([100, 200, 200, 300], ascending=True) is True
        assert is_sorted([100, 300, 200], ascending=True) is False

    def test_descending(self):
        assert is_sorted([300, 200, 200, 100], ascending=False) is True
        assert is_sorted([300, 100, 200], ascending=False) is False

    def test_single_price_is_sorted(self):
        assert is_sorted([5000.0], ascending=True) is True
        assert is_sorted([5000.0], ascending=False) is True

    def test_empty_is_not_sorted(self):
        assert is_sorted([], ascending=True) is False

    def test_violation_is_logged_with_positions(self, caplog):
        with caplog.at_level(logging.ERROR):
            is_sorted([100.0, 300.0, 200.0], ascending=True)
        assert "Found 300.0 > 200.0 at positions 1 and 2" in caplog.text


class TestFirstWithinLimit:

    def test_max_bound(self):
        prices = [8800.0, 8500.0, 8000.0]
        assert first_within_limit(prices, 9000, is_max=True) is True
        assert first_within_limit(prices, 8000, is_max=True) is False

    def test_min_bound(self):
        prices = [5000.0, 5200.0]
        assert first_within_limit(prices, 5000, is_max=False) is True
        assert first_within_limit(prices, 5100, is_max=False) is False

    def test_empty_list_is_false(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert first_within_limit([], 9000, is_max=True) is False
        assert "No prices found" in caplog.text

    def test_first_price(self):
        assert first_price([4999.0, 10.0]) == 4999.0
        assert first_price([]) is None
