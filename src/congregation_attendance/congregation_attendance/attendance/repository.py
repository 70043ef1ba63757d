from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceFilter, AttendanceKey, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_attendance(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_attendance(self, keys: Sequence[AttendanceKey], new_records: Sequence[AttendanceRecord]) -> None:
        """Delete every live record matching ``keys`` then insert ``new_records``.

        Must run as one transaction: no key may end up with two live records.
        """

        raise NotImplementedError
