from numbers import Real
from typing import Tuple, Union

from schoolplacement.core.models import SchoolLevel

# (exclusive lower bound, level), checked top to bottom
RANK_THRESHOLDS: Tuple[Tuple[float, SchoolLevel], ...] = (
    (3, SchoolLevel.NATIONAL),
    (2, SchoolLevel.COUNTY),
    (1, SchoolLevel.SUB_COUNTY),
)

# (inclusive lower bound, level), checked top to bottom
SCORE_THRESHOLDS: Tuple[Tuple[float, SchoolLevel], ...] = (
    (800, SchoolLevel.NATIONAL),
    (500, SchoolLevel.COUNTY),
    (300, SchoolLevel.SUB_COUNTY),
)

MAX_SCORE = 1000


def classify_rank(rank: float) -> SchoolLevel:
    for bound, level in RANK_THRESHOLDS:
        if rank > bound:
            return level
    return SchoolLevel.DISTRICT


def required_level(score: float) -> SchoolLevel:
    """Level a student with this score must be placed at."""
    for bound, level in SCORE_THRESHOLDS:
        if score >= bound:
            return level
    return SchoolLevel.DISTRICT


def resolve_level(level_or_rank: Union[SchoolLevel, str, float]) -> SchoolLevel:
    """
    Turn a level name or a numeric rank into a SchoolLevel.

    Raises ValueError for anything else (including booleans).
    """
    if isinstance(level_or_rank, SchoolLevel):
        return level_or_rank
    if isinstance(level_or_rank, bool):
        raise ValueError(f"Invalid level: {level_or_rank!r}")
    if isinstance(level_or_rank, Real):
        return classify_rank(float(level_or_rank))
    if isinstance(level_or_rank, str):
        try:
            return SchoolLevel(level_or_rank.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid level: {level_or_rank!r}") from None
    raise ValueError(f"Invalid level: {level_or_rank!r}")
