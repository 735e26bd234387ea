"""Page object for the weather site's current-conditions page."""
import logging
from typing import Optional

from bazaar.core.locators import Locator
from bazaar.external.weather_api import parse_temperature
from bazaar.pages.base_page import BasePage

logger = logging.getLogger(__name__)


class WeatherPage(BasePage):

    TEMPERATURE_DISPLAY = Locator.xpath("//div[@class='display-temp']")

    def open(self, link: str) -> "WeatherPage":
        self.navigate_to(link)
        return self

    def read_temperature(self) -> Optional[float]:
        """Displayed temperature; falls back to textContent when innerText has no number."""
        temperature = parse_temperature(self.read_text(self.TEMPERATURE_DISPLAY, "Temperature"))
        if temperature is None:
            raw = self.page.locator(self.TEMPERATURE_DISPLAY.selector).first.text_content()
            temperature = parse_temperature(raw)
        logger.info(f"UI temperature: {temperature}")
        return temperature
