"""
Utilities Package.

Provides challenge/interstitial detection and the bypass waiter.
"""

from .challenge_handler import (
    ChallengeState,
    ChallengeCheck,
    ChallengeDetector,
    ChallengeCleared,
    classify_challenge,
    announce_manual_intervention,
    CHALLENGE_URL_MARKERS,
    CHALLENGE_TITLE_PHRASES,
)

__all__ = [
    "ChallengeState",
    "ChallengeCheck",
    "ChallengeDetector",
    "ChallengeCleared",
    "classify_challenge",
    "announce_manual_intervention",
    "CHALLENGE_URL_MARKERS",
    "CHALLENGE_TITLE_PHRASES",
]
