"""Page objects for the classifieds site and the weather comparison scenario."""

from .base_page import BasePage
from .home_page import HomePage
from .yepy_page import YepyPage
from .weather_page import WeatherPage

__all__ = [
    "BasePage",
    "HomePage",
    "YepyPage",
    "WeatherPage",
]
