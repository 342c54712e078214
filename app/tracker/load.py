"""
Training load and RPE scale.

Training load (session-RPE method) is the session duration in minutes
multiplied by the athlete's rating of perceived exertion::

    training_load = duration * rpe

The value is stored redundantly next to its inputs but is always
recomputed on write, so it can never diverge from them.
"""

from enum import Enum
from typing import Optional

RPE_MIN = 1
RPE_MAX = 10

RPE_DESCRIPTIONS: dict[int, str] = {
    1: "Very, very easy",
    2: "Easy",
    3: "Moderate",
    4: "Somewhat hard",
    5: "Hard",
    6: "Hard",
    7: "Very hard",
    8: "Very hard",
    9: "Very hard",
    10: "Maximal",
}


class RpeBand(str, Enum):
    """Display emphasis for an RPE value."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    MAXIMAL = "maximal"


def compute_training_load(duration: int, rpe: int) -> int:
    """Return ``duration * rpe``."""
    return int(duration) * int(rpe)


def rpe_band(rpe: int) -> Optional[RpeBand]:
    """Band an RPE value: 1-3 low, 4-6 moderate, 7-8 high, 9-10 maximal.

    Values outside the scale have no band.
    """
    if 1 <= rpe <= 3:
        return RpeBand.LOW
    if 4 <= rpe <= 6:
        return RpeBand.MODERATE
    if 7 <= rpe <= 8:
        return RpeBand.HIGH
    if 9 <= rpe <= 10:
        return RpeBand.MAXIMAL
    return None


def rpe_description(rpe: int) -> str:
    return RPE_DESCRIPTIONS.get(rpe, "")
