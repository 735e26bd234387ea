"""
Core interaction package.

Provides the wait engine, strict interaction layer, locators and
screenshot sinks that page objects are built on.
"""

from .locators import Locator

from .waits import (
    Waiter,
    WaitCondition,
    Visible,
    HandleVisible,
    Clickable,
    UrlContains,
    UrlEquals,
    UrlMatches,
    Predicate,
)

from .artifacts import (
    ArtifactSink,
    DirectoryArtifactSink,
    MemoryArtifactSink,
)

from .interactions import Interactions

__all__ = [
    "Locator",
    # Wait engine
    "Waiter",
    "WaitCondition",
    "Visible",
    "HandleVisible",
    "Clickable",
    "UrlContains",
    "UrlEquals",
    "UrlMatches",
    "Predicate",
    # Artifacts
    "ArtifactSink",
    "DirectoryArtifactSink",
    "MemoryArtifactSink",
    # Interactions
    "Interactions",
]
