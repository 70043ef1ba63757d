from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Nucleus, Unit


class UnitRepository(Protocol):
    """Units and nuclei are configured outside the engine; this is read-only."""

    def list_units(self) -> Sequence[Unit]:
        raise NotImplementedError

    def get_by_id(self, unit_id: str) -> Optional[Unit]:
        raise NotImplementedError

    def list_nuclei(self) -> Sequence[Nucleus]:
        raise NotImplementedError
