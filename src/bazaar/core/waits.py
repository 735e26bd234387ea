"""
Element wait engine.

One polling primitive (``Waiter.until``) evaluates any ``WaitCondition``
against live browser state until it holds or the deadline passes. Every
other wait in the harness (visibility, clickability, URL checks, challenge
clearance) is a condition handed to this primitive.

Usage:
    waiter = Waiter(page, timeout=10)
    button = waiter.until(Clickable(Locator.id("submit")))
    waiter.until(UrlContains("sorting=price_asc"), timeout=15)
"""

import logging
import time
from typing import Any, Callable, Iterable, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from bazaar.core.locators import Locator
from bazaar.errors import TimeoutFailure

logger = logging.getLogger(__name__)

# (value, observed): value is returned by the waiter once it is neither
# None nor False; observed is kept for the timeout diagnostic.
CheckResult = Tuple[Any, Any]


def _succeeded(value: Any) -> bool:
    return value is not None and value is not False


class WaitCondition:
    """A predicate over live browser state."""

    description = "condition"

    def check(self, page: Page) -> CheckResult:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.description


class Visible(WaitCondition):
    """First element matching ``locator`` is rendered and visible."""

    def __init__(self, locator: Locator):
        self.locator = locator
        self.description = f"visibility of {locator}"

    def check(self, page: Page) -> CheckResult:
        matches = page.locator(self.locator.selector)
        count = matches.count()
        if count == 0:
            return None, "no matching element"
        element = matches.first
        if element.is_visible():
            return element, f"visible ({count} match)"
        return None, f"{count} match, not visible"


class HandleVisible(WaitCondition):
    """An already-resolved element handle is visible."""

    def __init__(self, handle: Any, name: Optional[str] = None):
        self.handle = handle
        self.description = f"visibility of {name or 'element handle'}"

    def check(self, page: Page) -> CheckResult:
        if self.handle.is_visible():
            return self.handle, "visible"
        return None, "not visible"


class Clickable(WaitCondition):
    """First element matching ``locator`` is visible and enabled."""

    def __init__(self, locator: Locator):
        self.locator = locator
        self.description = f"clickability of {locator}"

    def check(self, page: Page) -> CheckResult:
        matches = page.locator(self.locator.selector)
        count = matches.count()
        if count == 0:
            return None, "no matching element"
        element = matches.first
        if not element.is_visible():
            return None, f"{count} match, not visible"
        if not element.is_enabled():
            return None, f"{count} match, disabled"
        return element, "clickable"


class UrlContains(WaitCondition):
    def __init__(self, fragment: str):
        self.fragment = fragment
        self.description = f"URL to contain {fragment!r}"

    def check(self, page: Page) -> CheckResult:
        url = page.url
        return (True if self.fragment in url else None), url


class UrlEquals(WaitCondition):
    def __init__(self, url: str):
        self.url = url
        self.description = f"URL to be {url!r}"

    def check(self, page: Page) -> CheckResult:
        current = page.url
        return (True if current == self.url else None), current


class UrlMatches(WaitCondition):
    """URL is on ``domain`` and contains none of ``excluded`` markers."""

    def __init__(self, domain: str, excluded: Iterable[str] = ()):
        self.domain = domain
        self.excluded = tuple(excluded)
        self.description = f"URL on {domain!r} without {list(self.excluded)}"

    def check(self, page: Page) -> CheckResult:
        url = page.url
        ok = self.domain in url and not any(marker in url for marker in self.excluded)
        return (True if ok else None), url


class Predicate(WaitCondition):
    """
    Arbitrary ``fn(page)``; holds once the return value is truthy.

    A falsy result such as ``0`` or an empty list keeps polling and is
    reported as the last observation on timeout.
    """

    def __init__(self, fn: Callable[[Page], Any], description: str = "custom predicate"):
        self.fn = fn
        self.description = description

    def check(self, page: Page) -> CheckResult:
        value = self.fn(page)
        return (value if value else None), value


class Waiter:
    """Polls a condition until it holds or the timeout elapses."""

    def __init__(
        self,
        page: Page,
        timeout: float = 10.0,
        poll_interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.page = page
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def until(self, condition: WaitCondition, timeout: Optional[float] = None) -> Any:
        """
        Block until ``condition`` holds and return its value.

        Args:
            condition: Condition re-evaluated against the live page each tick
            timeout: Seconds to wait; defaults to the waiter's timeout

        Returns:
            The condition's value (an element, True, a state, ...)

        Raises:
            TimeoutFailure: condition still false at the deadline
        """
        budget = self.timeout if timeout is None else timeout
        deadline = self._clock() + budget
        last_observed: Any = None

        while True:
            try:
                value, last_observed = condition.check(self.page)
            except PlaywrightError as e:
                # Node replaced mid-poll; re-resolve on the next tick
                value, last_observed = None, f"{type(e).__name__}: {e}"

            if _succeeded(value):
                return value

            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            self._sleep(min(self.poll_interval, remaining))

        logger.debug(f"Timed out waiting for {condition.description}; last observed: {last_observed}")
        raise TimeoutFailure(
            condition.description,
            budget,
            last_observed,
            context={"url": self.current_url()},
        )

    def current_url(self) -> Optional[str]:
        try:
            return self.page.url
        except PlaywrightError:
            return None

    def for_visible(self, locator: Locator, timeout: Optional[float] = None):
        return self.until(Visible(locator), timeout)

    def for_clickable(self, locator: Locator, timeout: Optional[float] = None):
        return self.until(Clickable(locator), timeout)

    def for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> bool:
        return self.until(UrlContains(fragment), timeout)

    def for_url_to_be(self, url: str, timeout: Optional[float] = None) -> bool:
        return self.until(UrlEquals(url), timeout)
