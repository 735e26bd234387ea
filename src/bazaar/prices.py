"""
Price extraction and ordering verification.

Turns localized listing prices ("4.999 TL", "1.234,56 TL") into floats
and checks sort order and filter bounds over the resulting list.

Empty price nodes are layout noise and are skipped. Non-empty text that
does not parse is a defect signal (a locator regression or a formatting
change upstream) and raises ``ParseFailure``.
"""

import logging
import re
from typing import Any, Iterable, List, Optional, Sequence

from bazaar.errors import ParseFailure

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "TL"

# Currency tokens accepted as a suffix, in addition to the configured one
CURRENCY_SUFFIXES = ("TL", "₺")

NUMBER_PATTERN = re.compile(r"^[+-]?\d+(?:\.\d+)?$")


def parse_price(text: str, currency: str = DEFAULT_CURRENCY) -> float:
    """
    Parse one localized price string.

    Thousands separators are dots and the decimal separator is a comma:
    "4.999 TL" -> 4999.0, "1.234,56 TL" -> 1234.56.

    Raises:
        ParseFailure: text is empty or not a number once normalized
    """
    cleaned = text.strip()
    suffixes = {currency, *CURRENCY_SUFFIXES}
    for suffix in sorted(suffixes, key=len, reverse=True):
        if suffix and cleaned.endswith(suffix):
            cleaned = cleaned[: -len(suffix)].strip()
            break

    cleaned = cleaned.replace(".", "").replace(",", ".")

    if not NUMBER_PATTERN.match(cleaned):
        logger.error(f"Failed to parse price: {text}")
        raise ParseFailure(text)

    return float(cleaned)


def parse_prices(texts: Iterable[str], currency: str = DEFAULT_CURRENCY) -> List[float]:
    """Parse raw texts in order, skipping the empty ones."""
    prices = []
    for raw in texts:
        text = (raw or "").strip()
        if not text:
            continue
        prices.append(parse_price(text, currency))
    return prices


def _element_text(element: Any) -> str:
    if isinstance(element, str):
        return element
    return element.inner_text()


def extract_prices(elements: Sequence[Any], currency: str = DEFAULT_CURRENCY) -> List[float]:
    """
    Read and parse the text of each price element, preserving DOM order.

    Args:
        elements: Playwright locators/handles (anything with ``inner_text()``)
            or raw strings
        currency: Currency suffix to strip

    Returns:
        Parsed prices; never longer than ``elements``
    """
    texts = [_element_text(element) for element in elements]
    prices = parse_prices(texts, currency)
    logger.info(f"Extracted {len(prices)} prices: {prices}")
    return prices


def is_sorted(prices: Sequence[float], ascending: bool = True) -> bool:
    """
    Check adjacent-pair ordering.

    An empty list is not considered sorted (there is nothing to verify);
    a single price is.
    """
    if not prices:
        logger.warning("No prices found on the page")
        return False

    if len(prices) == 1:
        logger.info("Only one price found, considered sorted")
        return True

    order_name = "ascending" if ascending else "descending"

    for i in range(len(prices) - 1):
        current, following = prices[i], prices[i + 1]
        valid = current <= following if ascending else current >= following
        if not valid:
            logger.error(
                f"Prices not sorted {order_name}. Found {current} "
                f"{'>' if ascending else '<'} {following} at positions {i} and {i + 1}"
            )
            return False

    logger.info(f"✓ All {len(prices)} prices are sorted in {order_name} order")
    return True


def first_within_limit(prices: Sequence[float], limit: float, is_max: bool) -> bool:
    """
    Compare the first price against a filter bound.

    The caller is expected to have sorted to match: descending for a max
    bound (``first <= limit``), ascending for a min bound (``first >= limit``).
    """
    first = first_price(prices)
    if first is None:
        return False

    limit_type = "maximum" if is_max else "minimum"
    valid = first <= limit if is_max else first >= limit

    if valid:
        logger.info(f"✓ First price {first} is within {limit_type} limit {limit}")
    else:
        logger.error(f"First price {first} exceeds {limit_type} limit {limit}")

    return valid


def first_price(prices: Sequence[float]) -> Optional[float]:
    if not prices:
        logger.warning("No prices found on the page")
        return None
    logger.info(f"First price in list: {prices[0]}")
    return prices[0]
