"""Immutable element locators.

Page objects own their locators as class attributes and pass them
explicitly into the interaction layer. A ``Locator`` is only a
description; it is resolved against the live page at the moment of use.
"""

from dataclasses import dataclass
from typing import Literal

Strategy = Literal["id", "css", "xpath", "text"]


@dataclass(frozen=True)
class Locator:
    """How to find one or more elements."""

    strategy: Strategy
    value: str

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls("id", value)

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls("css", value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls("xpath", value)

    @classmethod
    def text(cls, value: str) -> "Locator":
        return cls("text", value)

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy == "id":
            return f"id={self.value}"
        if self.strategy == "xpath":
            return f"xpath={self.value}"
        if self.strategy == "text":
            return f"text={self.value}"
        return f"css={self.value}"

    def __str__(self) -> str:
        return f"By.{self.strategy}({self.value!r})"
