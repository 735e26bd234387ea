"""
Strict user-level interactions built on the wait engine.

Clicks go through Playwright's real pointer path only. There is no
forced or scripted fallback: an element a user could not click is
reported as a UI defect with a screenshot attached.

Targets are ``Locator`` descriptions resolved at the moment of use, so
handles are never cached across waits.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from bazaar.config import HarnessConfig
from bazaar.core.artifacts import ArtifactSink, DirectoryArtifactSink
from bazaar.core.locators import Locator
from bazaar.core.waits import Clickable, HandleVisible, Visible, Waiter
from bazaar.errors import (
    BazaarError,
    InteractionBlockedFailure,
    NotFoundFailure,
    StaleElementFailure,
    TimeoutFailure,
)

logger = logging.getLogger(__name__)

Target = Union[Locator, Any]

SCROLL_SCRIPTS = {
    "top": "window.scrollTo(0, 0);",
    "bottom": "window.scrollTo(0, document.body.scrollHeight);",
}


def _is_detached(error: Any) -> bool:
    text = str(error).lower()
    return "not attached" in text or "detached" in text


def _is_intercepted(error: Any) -> bool:
    return "intercepts pointer events" in str(error)


class Interactions:
    """Click / type / read operations with classified, screenshot-backed failures."""

    def __init__(
        self,
        page: Page,
        waiter: Optional[Waiter] = None,
        sink: Optional[ArtifactSink] = None,
        action_timeout: float = 5.0,
    ):
        self.page = page
        self.waiter = waiter or Waiter(page)
        self.sink = sink or DirectoryArtifactSink()
        self.action_timeout = action_timeout

    @classmethod
    def from_config(
        cls,
        page: Page,
        config: HarnessConfig,
        sink: Optional[ArtifactSink] = None,
    ) -> "Interactions":
        """Wire a waiter and screenshot directory from harness timeouts."""
        waiter = Waiter(page, timeout=config.implicit_wait, poll_interval=config.poll_interval)
        return cls(
            page,
            waiter=waiter,
            sink=sink or DirectoryArtifactSink(config.screenshot_dir),
            action_timeout=config.action_timeout,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def click(self, locator: Locator, name: str, timeout: Optional[float] = None) -> None:
        """
        Wait for ``locator`` to be clickable and click it like a user.

        Raises:
            NotFoundFailure: locator matched nothing by the deadline
            InteractionBlockedFailure: element covered by another or disabled
            StaleElementFailure: element detached between wait and click
            TimeoutFailure: element present but never became clickable
        """
        logger.info(f"Attempting to click: {name}")

        try:
            element = self.waiter.until(Clickable(locator), timeout)
        except TimeoutFailure as e:
            if self._match_count(locator) == 0:
                raise self._fail(
                    NotFoundFailure(f"Element '{name}' not found on page"),
                    name, "not_found", locator,
                ) from e
            raise self._fail(e, name, "not_clickable", locator)

        try:
            element.click(timeout=self.action_timeout * 1000)
        except PlaywrightTimeoutError as e:
            if _is_intercepted(e):
                logger.error(f"Element '{name}' is intercepted by another element")
                raise self._fail(
                    InteractionBlockedFailure(
                        f"Cannot click '{name}' - element is covered by another element"
                    ),
                    name, "click_intercepted", locator,
                ) from e
            if _is_detached(e):
                raise self._fail(
                    StaleElementFailure(f"Element '{name}' detached before click"),
                    name, "stale", locator,
                ) from e
            raise self._fail(
                TimeoutFailure(f"click on '{name}'", self.action_timeout, _first_line(e)),
                name, "not_clickable", locator,
            ) from e
        except PlaywrightError as e:
            error_cls = StaleElementFailure if _is_detached(e) else InteractionBlockedFailure
            raise self._fail(
                error_cls(f"Cannot click '{name}': {_first_line(e)}"),
                name, "click_failed", locator,
            ) from e

        logger.info(f"✓ Successfully clicked: {name}")

    def type_text(
        self,
        target: Target,
        text: str,
        name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Wait for ``target`` to be visible, clear it and enter ``text``."""
        label = name or str(target)
        element = self._wait_visible(target, label, timeout, "type_failed")
        try:
            element.fill("")
            element.fill(text)
        except PlaywrightError as e:
            raise self._interaction_error(e, label, "type_failed", target) from e
        logger.debug(f"Sent text '{text}' to element: {label}")

    def read_text(
        self,
        target: Target,
        name: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Wait for ``target`` to be visible and return its whitespace-normalized text."""
        label = name or str(target)
        element = self._wait_visible(target, label, timeout, "read_failed")
        try:
            raw = element.inner_text()
        except PlaywrightError as e:
            raise self._interaction_error(e, label, "read_failed", target) from e
        text = " ".join(raw.split())
        logger.debug(f"Got text '{text}' from element: {label}")
        return text

    def is_displayed(self, locator: Locator, name: str) -> bool:
        """Advisory visibility check; absence is ``False``, never an error."""
        try:
            matches = self.page.locator(locator.selector)
            if matches.count() == 0:
                logger.debug(f"{name} not found")
                return False
            displayed = matches.first.is_visible()
        except PlaywrightError as e:
            logger.debug(f"{name} not found: {_first_line(e)}")
            return False
        logger.debug(f"{name} displayed: {displayed}")
        return displayed

    def scroll_to(self, position: Union[str, int]) -> None:
        """Scroll the window to 'top', 'bottom' or a pixel offset."""
        key = str(position).lower()
        if key in SCROLL_SCRIPTS:
            self.page.evaluate(SCROLL_SCRIPTS[key])
            logger.debug(f"Scrolled to {key} of page")
            return
        try:
            pixels = int(key)
        except ValueError:
            logger.warning(f"Invalid scroll value: {position}. Use 'top', 'bottom', or pixel number.")
            return
        self.page.evaluate(f"window.scrollTo(0, {pixels});")
        logger.debug(f"Scrolled {pixels} pixels")

    def capture_screenshot(self, name: str) -> Optional[Path]:
        """Attach a screenshot of the current viewport; never raises."""
        try:
            content = self.page.screenshot()
            return self.sink.attach(name, content)
        except Exception as e:
            logger.warning(f"Failed to take screenshot: {e}")
            return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _wait_visible(self, target: Target, label: str, timeout: Optional[float], suffix: str):
        if isinstance(target, Locator):
            condition = Visible(target)
        else:
            condition = HandleVisible(target, label)

        try:
            return self.waiter.until(condition, timeout)
        except TimeoutFailure as e:
            if isinstance(target, Locator) and self._match_count(target) == 0:
                raise self._fail(
                    NotFoundFailure(f"Element '{label}' not found on page"),
                    label, "not_found", target,
                ) from e
            if _is_detached(e.last_observed):
                raise self._fail(
                    StaleElementFailure(f"Element '{label}' is no longer attached to the page"),
                    label, "stale", target,
                ) from e
            raise self._fail(e, label, suffix, target)

    def _interaction_error(self, error: PlaywrightError, label: str, suffix: str, target: Target):
        error_cls = StaleElementFailure if _is_detached(error) else InteractionBlockedFailure
        return self._fail(
            error_cls(f"Interaction with '{label}' failed: {_first_line(error)}"),
            label, suffix, target,
        )

    def _match_count(self, locator: Locator) -> int:
        try:
            return self.page.locator(locator.selector).count()
        except PlaywrightError:
            return 0

    def _fail(self, error: BazaarError, name: str, suffix: str, target: Target) -> BazaarError:
        """Attach diagnostics to ``error`` and return it for raising."""
        screenshot = self.capture_screenshot(f"{name}_{suffix}")
        error.with_context(
            element=name,
            locator=str(target) if isinstance(target, Locator) else None,
            url=self.waiter.current_url(),
            screenshot=str(screenshot) if screenshot else None,
        )
        logger.error(f"{type(error).__name__}: {error}")
        return error


def _first_line(error: Any) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__
