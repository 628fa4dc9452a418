"""Level calculation from lifetime minutes.

Level and multiplier are a pure function of the minutes a domain has
accumulated. Nothing else is allowed to set them.
"""

from typing import Sequence

from lifeledger.domain.constants import LEVEL_THRESHOLDS, MULTIPLIERS
from lifeledger.domain.entities import LevelProgress


def level_and_multiplier(
    lifetime_minutes: float,
    thresholds: Sequence[float] = LEVEL_THRESHOLDS,
    multipliers: Sequence[float] = MULTIPLIERS,
) -> tuple[int, float]:
    """Return (level, multiplier) for a lifetime-minutes total.

    Args:
        lifetime_minutes: Total minutes logged in a domain
        thresholds: Ascending threshold table in hours
        multipliers: Multiplier unlocked at each threshold

    Returns:
        Tuple of 1-based level and its multiplier. Totals past the last
        threshold stay pinned at the last pair.
    """
    hours = lifetime_minutes / 60
    level = 1
    multiplier = multipliers[0]

    for index, threshold in enumerate(thresholds):
        if hours < threshold:
            break
        level = index + 1
        multiplier = multipliers[index]

    return level, multiplier


def is_max_level(level: int, thresholds: Sequence[float] = LEVEL_THRESHOLDS) -> bool:
    """Check whether a level is the last one in the table."""
    return level >= len(thresholds)


def level_progress(
    lifetime_minutes: float,
    thresholds: Sequence[float] = LEVEL_THRESHOLDS,
    multipliers: Sequence[float] = MULTIPLIERS,
) -> LevelProgress:
    """Describe how far a lifetime total is through its current level."""
    level, multiplier = level_and_multiplier(lifetime_minutes, thresholds, multipliers)
    hours = lifetime_minutes / 60
    current_threshold = thresholds[level - 1]

    if is_max_level(level, thresholds):
        return LevelProgress(
            level=level,
            multiplier=multiplier,
            hours=hours,
            current_threshold_hours=current_threshold,
            next_threshold_hours=thresholds[-1],
            percentage=100.0,
            is_max_level=True,
        )

    next_threshold = thresholds[level]
    level_range = next_threshold - current_threshold
    percentage = min((hours - current_threshold) / level_range * 100, 100.0)

    return LevelProgress(
        level=level,
        multiplier=multiplier,
        hours=hours,
        current_threshold_hours=current_threshold,
        next_threshold_hours=next_threshold,
        percentage=percentage,
        is_max_level=False,
    )
