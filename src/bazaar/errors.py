"""Failure taxonomy for the browser harness.

Every failure that leaves the interaction layer carries a ``context`` dict
(element name, last URL, screenshot path, ...) so a red test explains
itself without re-running it.
"""

from typing import Any, Dict, Optional


class BazaarError(Exception):
    """Base error for the harness."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def with_context(self, **extra: Any) -> "BazaarError":
        """Merge extra diagnostic fields in place and return self."""
        self.context.update({k: v for k, v in extra.items() if v is not None})
        return self

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} [{details}]"


class TimeoutFailure(BazaarError):
    """A wait condition never became true within its budget."""

    def __init__(
        self,
        description: str,
        timeout: float,
        last_observed: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.description = description
        self.timeout = timeout
        self.last_observed = last_observed
        merged = {"last_observed": last_observed}
        merged.update(context or {})
        super().__init__(
            f"Timed out after {timeout:g}s waiting for {description}",
            merged,
        )


class InteractionFailure(BazaarError):
    """Element could not be interacted with the way a user would."""


class InteractionBlockedFailure(InteractionFailure):
    """Element was found but is covered, disabled or otherwise not interactable."""


class NotFoundFailure(InteractionFailure):
    """Locator matched nothing on the page."""


class StaleElementFailure(InteractionFailure):
    """Handle points at a node that is no longer attached to the DOM."""


class ParseFailure(BazaarError, ValueError):
    """Non-empty price text did not match the expected numeric pattern."""

    def __init__(self, text: str, context: Optional[Dict[str, Any]] = None):
        self.text = text
        super().__init__(f"Invalid price format: {text!r}", context)


class NavigationFailure(BazaarError):
    """The composed open-site flow aborted at ``step``."""

    def __init__(self, step: str, message: str, result=None):
        self.step = step
        self.result = result
        context = {"step": step}
        if result is not None:
            context["final_url"] = result.final_url
        super().__init__(message, context)


class WeatherApiError(BazaarError):
    """Weather API returned an unusable response."""
