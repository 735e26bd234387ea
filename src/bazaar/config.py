from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
import os

load_dotenv()  # Loads variables from .env file


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    LOG_LEVEL = os.getenv("BAZAAR_LOG_LEVEL", "INFO")
    LIVE_TESTS = _env_bool("BAZAAR_LIVE", False)

    # Weather comparison scenario
    WEATHER_API_KEY = os.getenv("WEATHER_API_KEY")


settings = Settings()


@dataclass
class HarnessConfig:
    """Timeouts (seconds) and locations consumed by the harness core."""
    base_url: str = "https://www.sahibinden.com"

    # Waits
    implicit_wait: float = 10.0  # Default per-element wait
    page_load: float = 30.0  # Navigation timeout
    action_timeout: float = 5.0  # Budget for a single click/fill once clickable
    challenge_wait: float = 30.0  # Automatic or manual challenge clearance
    page_ready_timeout: float = 30.0  # Final resting URL confirmation
    cookie_banner_timeout: float = 5.0  # Optional consent banner
    poll_interval: float = 0.25

    screenshot_dir: str = "build/screenshots"
    currency: str = "TL"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        """Load configuration from environment variables.

        Environment variables are prefixed with BAZAAR_,
        e.g. BAZAAR_CHALLENGE_WAIT=60

        Returns:
            HarnessConfig: Configuration instance with values from environment
        """
        config = cls()
        prefix = "BAZAAR_"

        for field_name in config.__dataclass_fields__:
            env_value = os.getenv(f"{prefix}{field_name.upper()}")
            if env_value is None:
                continue
            field_type = config.__dataclass_fields__[field_name].type
            try:
                if field_type == float:
                    setattr(config, field_name, float(env_value))
                else:
                    setattr(config, field_name, env_value)
            except ValueError:
                pass  # Keep default if conversion fails

        return config

    def to_dict(self) -> dict:
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }


@dataclass
class WeatherApiConfig:
    api_key: Optional[str] = None
    base_url: str = "https://dataservice.accuweather.com"
    location_key: str = "349727"
    temperature_tolerance: float = 1.0

    @classmethod
    def from_env(cls) -> "WeatherApiConfig":
        return cls(
            api_key=os.getenv("WEATHER_API_KEY"),
            base_url=os.getenv("WEATHER_API_URL", "https://dataservice.accuweather.com"),
            location_key=os.getenv("WEATHER_LOCATION_KEY", "349727"),
            temperature_tolerance=float(os.getenv("WEATHER_TEMPERATURE_TOLERANCE", "1.0")),
        )
