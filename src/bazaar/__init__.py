"""Browser end-to-end harness for a classifieds site using Playwright."""

__version__ = "0.1.0"

from bazaar.errors import (
    BazaarError,
    TimeoutFailure,
    InteractionFailure,
    InteractionBlockedFailure,
    NotFoundFailure,
    StaleElementFailure,
    ParseFailure,
    NavigationFailure,
    WeatherApiError,
)
from bazaar.config import HarnessConfig, WeatherApiConfig, settings
from bazaar.browser_config import BrowserConfig, LOCAL_CONFIG, HEADLESS_CONFIG, GRID_CONFIG

# Core
from bazaar.core import (
    Locator,
    Waiter,
    Interactions,
    DirectoryArtifactSink,
    MemoryArtifactSink,
)
from bazaar.utils import ChallengeDetector, ChallengeState
from bazaar.navigation import NavigationResult, SiteNavigator
from bazaar.prices import parse_price, extract_prices, is_sorted, first_within_limit

# Session and page objects
from bazaar.infrastructure import BrowserSession
from bazaar.pages import BasePage, HomePage, YepyPage, WeatherPage

__all__ = [
    # Errors
    "BazaarError",
    "TimeoutFailure",
    "InteractionFailure",
    "InteractionBlockedFailure",
    "NotFoundFailure",
    "StaleElementFailure",
    "ParseFailure",
    "NavigationFailure",
    "WeatherApiError",
    # Config
    "HarnessConfig",
    "WeatherApiConfig",
    "settings",
    "BrowserConfig",
    "LOCAL_CONFIG",
    "HEADLESS_CONFIG",
    "GRID_CONFIG",
    # Core
    "Locator",
    "Waiter",
    "Interactions",
    "DirectoryArtifactSink",
    "MemoryArtifactSink",
    "ChallengeDetector",
    "ChallengeState",
    "NavigationResult",
    "SiteNavigator",
    "parse_price",
    "extract_prices",
    "is_sorted",
    "first_within_limit",
    # Session and pages
    "BrowserSession",
    "BasePage",
    "HomePage",
    "YepyPage",
    "WeatherPage",
]
