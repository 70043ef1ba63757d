from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_non_negative
from ..core.constants import FOLLOW_UP_ABSENCE_FLOOR
from ..core.enums import FrequencyCategory
from ..settings.model import CategoryThresholds

CATEGORY_LABELS = {
    FrequencyCategory.REGULAR: "Regular attendance",
    FrequencyCategory.ATTENTION: "Needs attention",
    FrequencyCategory.LOW: "Low attendance",
    FrequencyCategory.CRITICAL: "Critical attendance",
}


@dataclass(frozen=True)
class CategoryInfo:
    tier: FrequencyCategory
    label: str
    floor: int


def tier_floors(thresholds: CategoryThresholds) -> list[tuple[FrequencyCategory, int]]:
    """(tier, lower bound) pairs in ascending severity."""
    return [
        (FrequencyCategory.REGULAR, 0),
        (FrequencyCategory.ATTENTION, thresholds.attention),
        (FrequencyCategory.LOW, thresholds.low),
        (FrequencyCategory.CRITICAL, thresholds.critical),
    ]


def categorize(absence_count: int, thresholds: CategoryThresholds) -> CategoryInfo:
    """Highest tier whose lower bound is <= ``absence_count``."""

    absence_count = require_non_negative(absence_count, "Absence count")

    tier, floor = FrequencyCategory.REGULAR, 0
    for candidate, candidate_floor in tier_floors(thresholds):
        if candidate_floor <= absence_count:
            tier, floor = candidate, candidate_floor
    return CategoryInfo(tier=tier, label=CATEGORY_LABELS[tier], floor=floor)


def is_follow_up_eligible(absence_count: int) -> bool:
    return require_non_negative(absence_count, "Absence count") >= FOLLOW_UP_ABSENCE_FLOOR
