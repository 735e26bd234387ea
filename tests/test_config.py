"""Tests for harness and browser configuration."""

import pytest
from pydantic import ValidationError

from bazaar.browser_config import (
    CHROMIUM_STABILITY_ARGS,
    GRID_CONFIG,
    HEADLESS_CONFIG,
    LOCAL_CONFIG,
    BrowserConfig,
)
from bazaar.config import HarnessConfig, WeatherApiConfig

BROWSER_ENV = (
    "BAZAAR_BROWSER",
    "BAZAAR_HEADLESS",
    "BAZAAR_GRID_URL",
    "BAZAAR_USER_AGENT",
    "BAZAAR_MAXIMIZE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in BROWSER_ENV:
        monkeypatch.delenv(name, raising=False)
    for name in HarnessConfig.__dataclass_fields__:
        monkeypatch.delenv(f"BAZAAR_{name.upper()}", raising=False)
    return monkeypatch


class TestHarnessConfig:

    def test_defaults(self, clean_env):
        config = HarnessConfig.from_env()

        assert config.base_url == "https://www.sahibinden.com"
        assert config.challenge_wait == 30.0
        assert config.implicit_wait == 10.0
        assert config.cookie_banner_timeout == 5.0
        assert config.screenshot_dir == "build/screenshots"

    def test_env_overrides(self, clean_env):
        clean_env.setenv("BAZAAR_CHALLENGE_WAIT", "60")
        clean_env.setenv("BAZAAR_BASE_URL", "https://staging.example.com")

        config = HarnessConfig.from_env()

        assert config.challenge_wait == 60.0
        assert config.base_url == "https://staging.example.com"

    def test_invalid_number_keeps_default(self, clean_env):
        clean_env.setenv("BAZAAR_PAGE_LOAD", "slow")

        assert HarnessConfig.from_env().page_load == 30.0

    def test_to_dict(self):
        data = HarnessConfig().to_dict()
        assert data["poll_interval"] == 0.25
        assert data["currency"] == "TL"


class TestWeatherApiConfig:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WEATHER_API_KEY", "secret")
        monkeypatch.setenv("WEATHER_LOCATION_KEY", "318251")
        monkeypatch.delenv("WEATHER_API_URL", raising=False)
        monkeypatch.delenv("WEATHER_TEMPERATURE_TOLERANCE", raising=False)

        config = WeatherApiConfig.from_env()

        assert config.api_key == "secret"
        assert config.location_key == "318251"
        assert config.base_url == "https://dataservice.accuweather.com"
        assert config.temperature_tolerance == 1.0


class TestBrowserConfig:

    def test_defaults(self):
        config = BrowserConfig()

        assert config.browser_type == "chromium"
        assert config.headless is False
        assert config.locale == "tr-TR"
        assert config.launch_args == CHROMIUM_STABILITY_ARGS
        assert config.launch_args is not CHROMIUM_STABILITY_ARGS

    def test_viewport(self):
        assert BrowserConfig(maximize=True, headless=False).viewport is None
        assert BrowserConfig(maximize=True, headless=True).viewport == {"width": 1920, "height": 1080}
        assert BrowserConfig(maximize=False, window_width=1280, window_height=720).viewport == {
            "width": 1280,
            "height": 720,
        }

    def test_rejects_unknown_browser(self):
        with pytest.raises(ValidationError):
            BrowserConfig(browser_type="opera")

    def test_validates_assignment(self):
        config = BrowserConfig()
        with pytest.raises(ValidationError):
            config.window_width = 10

    @pytest.mark.parametrize(
        "name, browser_type, channel",
        [
            ("chrome", "chromium", "chrome"),
            ("edge", "chromium", "msedge"),
            ("firefox", "firefox", None),
            ("Safari", "webkit", None),
            ("unknown", "chromium", None),
        ],
    )
    def test_from_env_aliases(self, clean_env, name, browser_type, channel):
        clean_env.setenv("BAZAAR_BROWSER", name)

        config = BrowserConfig.from_env()

        assert config.browser_type == browser_type
        assert config.channel == channel
        if browser_type != "chromium":
            assert config.launch_args == []

    def test_from_env_grid_and_headless(self, clean_env):
        clean_env.setenv("BAZAAR_GRID_URL", "ws://grid:3000/")
        clean_env.setenv("BAZAAR_HEADLESS", "true")

        config = BrowserConfig.from_env()

        assert config.grid_enabled is True
        assert config.grid_url == "ws://grid:3000/"
        assert config.headless is True

    def test_presets(self):
        assert LOCAL_CONFIG.channel == "chrome"
        assert LOCAL_CONFIG.headless is False
        assert HEADLESS_CONFIG.headless is True
        assert HEADLESS_CONFIG.viewport is not None
        assert GRID_CONFIG.grid_enabled is True
