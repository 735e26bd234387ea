"""
Infrastructure Package.

Provides browser session provisioning for test runs.
"""

from .browser_session import BrowserSession

__all__ = [
    "BrowserSession",
]
