from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Unit:
    """Domain entity: a congregation with its own weekly service schedule."""

    unit_id: str
    name: str
    service_days: tuple[int, ...]
    pastor_phone: Optional[str] = None


@dataclass(frozen=True)
class Nucleus:
    """Optional sub-grouping of members, used for display and filtering only."""

    nucleus_id: str
    name: str
    color: Optional[str] = None
