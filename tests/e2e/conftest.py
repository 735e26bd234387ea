"""Fixtures for live scenarios against the real site.

Each test owns one browser session. The session is always closed, and a
screenshot named after the test is attached when the test body fails.
"""

import logging

import pytest

from bazaar.browser_config import BrowserConfig
from bazaar.config import HarnessConfig
from bazaar.core.interactions import Interactions
from bazaar.infrastructure.browser_session import BrowserSession
from bazaar.logging_config import attach_run_log, detach_run_log, log_banner
from bazaar.pages import HomePage, YepyPage

logger = logging.getLogger(__name__)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item so fixtures can see failures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def harness_config():
    return HarnessConfig.from_env()


@pytest.fixture(scope="session", autouse=True)
def run_log(harness_config):
    """One log file per live session, written beside the failure screenshots."""
    handler = attach_run_log(harness_config.screenshot_dir, harness_config.log_level)
    logger.info(f"Run log: {handler.baseFilename}")
    yield handler
    detach_run_log(handler)


@pytest.fixture
def browser_session(request, harness_config):
    log_banner(logger, f"Starting test: {request.node.name}")
    session = BrowserSession(BrowserConfig.from_env(), harness_config)
    session.start()
    try:
        yield session
    finally:
        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed and session.is_started:
            Interactions.from_config(session.page, harness_config).capture_screenshot(
                f"{request.node.name}_failure"
            )
        session.close()
        log_banner(logger, f"Finished test: {request.node.name}")


@pytest.fixture
def interactions(browser_session, harness_config):
    return Interactions.from_config(browser_session.page, harness_config)


@pytest.fixture
def home_page(browser_session, harness_config, interactions):
    """Home page after challenge clearance and consent banner handling."""
    home = HomePage(browser_session.page, harness_config.base_url, interactions)
    result = home.navigate(
        challenge_timeout=harness_config.challenge_wait,
        page_ready_timeout=harness_config.page_ready_timeout,
        banner_timeout=harness_config.cookie_banner_timeout,
    )
    assert result.success, f"Failed to navigate to {harness_config.base_url}"
    return home


@pytest.fixture
def yepy_page(home_page, browser_session, harness_config, interactions):
    """Refurbished phones listing reached through Yepy -> Cihaz ara."""
    assert home_page.is_yepy_link_displayed(), "Yepy link should be displayed"
    home_page.click_yepy_link()
    home_page.wait_for_url_contains(HomePage.YEPY_PATH)

    yepy = YepyPage(browser_session.page, interactions, currency=harness_config.currency)
    assert yepy.is_device_search_displayed(), "Cihaz Ara link should be displayed"
    yepy.open_device_search()
    return yepy
