"""
Browser configuration for Playwright-driven test sessions.

This module provides a validated Pydantic configuration model for the
browser session a test runs in, and pre-configured instances for local,
headless CI and remote-server execution.
"""
import os
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# Launch flags that keep Chromium from advertising automation
CHROMIUM_STABILITY_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-blink-features=AutomationControlled",
]

# Browser names accepted from the environment, mapped to (engine, channel)
BROWSER_ALIASES = {
    "chrome": ("chromium", "chrome"),
    "chromium": ("chromium", None),
    "edge": ("chromium", "msedge"),
    "msedge": ("chromium", "msedge"),
    "firefox": ("firefox", None),
    "webkit": ("webkit", None),
    "safari": ("webkit", None),
}


class BrowserConfig(BaseModel):
    """
    Configuration for a single browser session.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to launch"
    )

    channel: Optional[str] = Field(
        default=None,
        description="Branded Chromium build to use ('chrome', 'msedge'); None for bundled Chromium"
    )

    headless: bool = Field(
        default=False,
        description="Run browser in headless mode (no visible UI). Manual challenge solving needs a visible window."
    )

    grid_enabled: bool = Field(
        default=False,
        description="Connect to a remote Playwright server instead of launching locally"
    )

    grid_url: str = Field(
        default="ws://localhost:3000/",
        description="WebSocket endpoint of the remote Playwright server"
    )

    user_agent: Optional[str] = Field(
        default=None,
        description="Custom user agent; None keeps the browser default"
    )

    maximize: bool = Field(
        default=True,
        description="Size the viewport to the full window size"
    )

    window_width: int = Field(default=1920, ge=320, le=7680)
    window_height: int = Field(default=1080, ge=240, le=4320)

    locale: str = Field(
        default="tr-TR",
        description="Browser locale; listing prices are rendered in this locale"
    )

    launch_args: List[str] = Field(
        default_factory=lambda: list(CHROMIUM_STABILITY_ARGS),
        description="Additional browser launch arguments (Chromium only)"
    )

    class Config:
        """Pydantic model configuration."""
        frozen = False
        validate_assignment = True

    @property
    def viewport(self) -> Optional[dict]:
        """Viewport for new contexts; None lets a maximized window drive the size."""
        if self.maximize and not self.headless:
            return None
        return {"width": self.window_width, "height": self.window_height}

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        """Build a config from BAZAAR_BROWSER, BAZAAR_HEADLESS, BAZAAR_GRID_URL, ..."""
        name = os.getenv("BAZAAR_BROWSER", "chromium").strip().lower()
        browser_type, channel = BROWSER_ALIASES.get(name, ("chromium", None))
        grid_url = os.getenv("BAZAAR_GRID_URL")

        values = {
            "browser_type": browser_type,
            "channel": channel,
            "headless": os.getenv("BAZAAR_HEADLESS", "false").lower() in ("1", "true", "yes"),
            "grid_enabled": bool(grid_url),
            "user_agent": os.getenv("BAZAAR_USER_AGENT") or None,
            "maximize": os.getenv("BAZAAR_MAXIMIZE", "true").lower() in ("1", "true", "yes"),
        }
        if grid_url:
            values["grid_url"] = grid_url
        if browser_type != "chromium":
            values["launch_args"] = []
        return cls(**values)


# --- Pre-configured Instances for Common Use Cases ---

LOCAL_CONFIG = BrowserConfig(
    browser_type="chromium",
    channel="chrome",
    headless=False,
    maximize=True,
)
"""
Visible local Chrome window.

Required when an operator may have to solve a challenge by hand.
"""

HEADLESS_CONFIG = BrowserConfig(
    browser_type="chromium",
    headless=True,
    maximize=False,
    launch_args=list(CHROMIUM_STABILITY_ARGS),
)
"""
Headless bundled Chromium for CI.

Challenges that need a human will time out here by design.
"""

GRID_CONFIG = BrowserConfig(
    browser_type="chromium",
    headless=True,
    grid_enabled=True,
    grid_url="ws://localhost:3000/",
    maximize=False,
)
"""
Remote Playwright server (e.g. the official Docker image running
``playwright run-server``).
"""
