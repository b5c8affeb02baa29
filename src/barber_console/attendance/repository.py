from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    """Repository interface for attendances.

    Note (DIP): services depend on this interface, not on the HTTP gateway.
    """

    def list_today(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_client(self, client_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def update_status(self, attendance_id: int, status: AttendanceStatus) -> AttendanceRecord:
        """Send only the new status; return the record as stored by the server."""

        raise NotImplementedError

    def create(self, attendance: NewAttendance) -> AttendanceRecord:
        raise NotImplementedError
