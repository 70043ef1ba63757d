from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Member:
    """Domain entity: a tracked individual belonging to exactly one unit."""

    member_id: str
    name: str
    unit_id: str
    nucleus_id: Optional[str] = None
    active: bool = True
    phone: Optional[str] = None
