from __future__ import annotations

import math
from collections.abc import Iterable

import pandas as pd

from ..models.processing_result import AgeBucket, AgeDistribution

"""Age distribution over converted user records.

Groups: under 20, 20 to 40 (inclusive), over 40 up to 60, over 60.
Percentages are of the total and rounded half-up to whole numbers.
"""

__all__ = [
    "AGE_GROUPS",
    "calculate_age_distribution",
]

# (key, label)
AGE_GROUPS: tuple[tuple[str, str], ...] = (
    ("under_20", "< 20"),
    ("20_to_40", "20 to 40"),
    ("40_to_60", "40 to 60"),
    ("over_60", "> 60"),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _group_counts(ages: pd.Series) -> dict[str, int]:
    return {
        "under_20": int((ages < 20).sum()),
        "20_to_40": int(ages.between(20, 40, inclusive="both").sum()),
        "40_to_60": int(((ages > 40) & (ages <= 60)).sum()),
        "over_60": int((ages > 60).sum()),
    }


def calculate_age_distribution(ages: Iterable[int]) -> AgeDistribution:
    series = pd.Series(list(ages), dtype="int64")
    total = int(series.size)
    counts = _group_counts(series)

    buckets = []
    for key, label in AGE_GROUPS:
        count = counts[key] if total else 0
        percentage = _round_half_up(count / total * 100) if total else 0
        buckets.append(AgeBucket(label=label, key=key, count=count, percentage=percentage))
    return AgeDistribution(total_users=total, buckets=tuple(buckets))
