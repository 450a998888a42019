"""
Numeric scales shared by the validator and the stats aggregator.
"""
import math

SCORE_MIN = 0
SCORE_MAX = 100

# currentLevel, targetLevel, importance and marketDemand of a skill gap
SKILL_LEVEL_MIN = 0
SKILL_LEVEL_MAX = 10


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp_score(value: float) -> int:
    return round_half_up(clamp(value, SCORE_MIN, SCORE_MAX))
