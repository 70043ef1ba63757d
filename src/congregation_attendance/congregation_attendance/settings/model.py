from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import DEFAULT_ATTENTION_FLOOR, DEFAULT_CRITICAL_FLOOR, DEFAULT_LOW_FLOOR


@dataclass(frozen=True)
class CategoryThresholds:
    """Lower bound (absence count) of each tier. REGULAR always starts at 0."""

    attention: int = DEFAULT_ATTENTION_FLOOR
    low: int = DEFAULT_LOW_FLOOR
    critical: int = DEFAULT_CRITICAL_FLOOR


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, passed explicitly into the analytics functions."""

    thresholds: CategoryThresholds = field(default_factory=CategoryThresholds)
    access_password_hash: str = ""
