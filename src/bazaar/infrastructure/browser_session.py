"""
Playwright browser session provisioning.

One session is owned by exactly one test at a time. ``BrowserSession`` is
a context manager so the browser is released on both the success and the
failure path:

    with BrowserSession(browser_config, harness_config) as session:
        page = session.page
        ...
"""
import logging
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from bazaar.browser_config import BrowserConfig
from bazaar.config import HarnessConfig

logger = logging.getLogger(__name__)


class BrowserSession:
    """Launches (or connects to) a browser and exposes one configured page."""

    def __init__(
        self,
        browser_config: Optional[BrowserConfig] = None,
        harness_config: Optional[HarnessConfig] = None,
    ):
        self.browser_config = browser_config or BrowserConfig()
        self.harness_config = harness_config or HarnessConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    def __enter__(self) -> "BrowserSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_started(self) -> bool:
        return self.page is not None

    def start(self) -> Page:
        """Start Playwright, open a browser context and return its page."""
        cfg = self.browser_config
        logger.info(
            f"Creating browser session: browser={cfg.browser_type}, channel={cfg.channel}, "
            f"grid={cfg.grid_enabled}, headless={cfg.headless}"
        )

        try:
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, cfg.browser_type)

            if cfg.grid_enabled:
                logger.info(f"Connecting to remote Playwright server at: {cfg.grid_url}")
                self._browser = launcher.connect(cfg.grid_url)
            else:
                self._browser = launcher.launch(**self._launch_options())

            self._context = self._browser.new_context(**self._context_options())
            self._configure_timeouts(self._context)
            self.page = self._context.new_page()
        except Exception:
            self.close()
            raise

        logger.info("Browser session started")
        return self.page

    def close(self) -> None:
        """Release context, browser and Playwright; errors are logged, never raised."""
        for name, resource, method in (
            ("context", self._context, "close"),
            ("browser", self._browser, "close"),
            ("playwright", self._playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, method)()
            except Exception as e:
                logger.error(f"Error closing {name}: {e}")

        self._context = None
        self._browser = None
        self._playwright = None
        self.page = None
        logger.debug("Browser session closed")

    def _launch_options(self) -> dict:
        cfg = self.browser_config
        options = {"headless": cfg.headless}
        if cfg.channel:
            options["channel"] = cfg.channel
        if cfg.browser_type == "chromium":
            args = list(cfg.launch_args)
            if cfg.maximize and not cfg.headless:
                args.append("--start-maximized")
            if args:
                options["args"] = args
        return options

    def _context_options(self) -> dict:
        cfg = self.browser_config
        options = {"locale": cfg.locale}
        viewport = cfg.viewport
        if viewport is None:
            options["no_viewport"] = True
        else:
            options["viewport"] = viewport
        if cfg.user_agent:
            options["user_agent"] = cfg.user_agent
        return options

    def _configure_timeouts(self, context: BrowserContext) -> None:
        timeouts = self.harness_config
        context.set_default_timeout(timeouts.implicit_wait * 1000)
        context.set_default_navigation_timeout(timeouts.page_load * 1000)
        logger.info(
            f"Configured timeouts: element={timeouts.implicit_wait}s, "
            f"navigation={timeouts.page_load}s"
        )
