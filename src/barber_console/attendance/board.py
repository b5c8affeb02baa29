"""View-model of the admin attendance screen.

Pure functions derive what the table shows (filter, sort, stats) and the
forward-only status transition; `AttendanceBoard` holds the screen state and
guards refresh results with sequence numbers so a slow, older response never
overwrites a newer one.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus, SortDirection, SortField, StatusFilter
from .model import AttendanceRecord


@dataclass(frozen=True)
class BoardStats:
    total: int = 0
    waiting: int = 0
    progress: int = 0
    finished: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "waiting": self.waiting, "progress": self.progress, "finished": self.finished}


_SORT_KEYS: dict[SortField, Callable[[AttendanceRecord], object]] = {
    SortField.ID: lambda r: int(r.attendance_id),
    SortField.CLIENT: lambda r: r.client.name.lower(),
    SortField.SERVICES: lambda r: len(r.services),
    SortField.STATUS: lambda r: r.status.value,
    SortField.PAYMENT: lambda r: r.payment_status.value,
}

_NEXT_STATUS = {
    AttendanceStatus.WAITING: AttendanceStatus.PROGRESS,
    AttendanceStatus.PROGRESS: AttendanceStatus.FINISHED,
    AttendanceStatus.FINISHED: AttendanceStatus.FINISHED,
}


def filter_by_status(records: Sequence[AttendanceRecord], status_filter: StatusFilter) -> List[AttendanceRecord]:
    if status_filter == StatusFilter.ALL:
        return list(records)
    return [r for r in records if r.status.value == status_filter.value]


def sort_records(
    records: Iterable[AttendanceRecord],
    field: SortField,
    direction: SortDirection,
) -> List[AttendanceRecord]:
    # sorted() is stable for reverse=True as well: equal keys keep input order.
    return sorted(records, key=_SORT_KEYS[field], reverse=direction == SortDirection.DESC)


def compute_stats(records: Sequence[AttendanceRecord]) -> BoardStats:
    counts = {status: 0 for status in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    return BoardStats(
        total=len(records),
        waiting=counts[AttendanceStatus.WAITING],
        progress=counts[AttendanceStatus.PROGRESS],
        finished=counts[AttendanceStatus.FINISHED],
    )


def toggle_sort(
    current_field: SortField,
    current_direction: SortDirection,
    requested_field: SortField,
) -> Tuple[SortField, SortDirection]:
    if requested_field == current_field:
        flipped = SortDirection.DESC if current_direction == SortDirection.ASC else SortDirection.ASC
        return current_field, flipped
    return requested_field, SortDirection.ASC


def next_status(current: AttendanceStatus) -> AttendanceStatus:
    return _NEXT_STATUS[current]


def can_advance(status: AttendanceStatus) -> bool:
    return status != AttendanceStatus.FINISHED


def parse_status_filter(value: Optional[str]) -> StatusFilter:
    try:
        return StatusFilter(value)
    except ValueError:
        return StatusFilter.ALL


def parse_sort_field(value: Optional[str]) -> SortField:
    try:
        return SortField(value)
    except ValueError:
        return SortField.ID


def parse_sort_direction(value: Optional[str]) -> SortDirection:
    try:
        return SortDirection(value)
    except ValueError:
        return SortDirection.DESC


class AttendanceBoard:
    """State container for one attendance screen.

    Note: The lock only makes individual transitions atomic; the board is owned
    by a single screen (or watcher) and is never shared between them.
    """

    def __init__(
        self,
        records: Sequence[AttendanceRecord] = (),
        *,
        status_filter: StatusFilter = StatusFilter.ALL,
        sort_field: SortField = SortField.ID,
        sort_direction: SortDirection = SortDirection.DESC,
    ):
        self._records: List[AttendanceRecord] = list(records)
        self.status_filter = status_filter
        self.sort_field = sort_field
        self.sort_direction = sort_direction
        self._issued_seq = 0
        self._applied_seq = 0
        self._lock = threading.Lock()

    @property
    def records(self) -> List[AttendanceRecord]:
        with self._lock:
            return list(self._records)

    @property
    def stats(self) -> BoardStats:
        return compute_stats(self.records)

    @property
    def applied_seq(self) -> int:
        return self._applied_seq

    def visible(self) -> List[AttendanceRecord]:
        filtered = filter_by_status(self.records, self.status_filter)
        return sort_records(filtered, self.sort_field, self.sort_direction)

    def set_filter(self, status_filter: StatusFilter) -> None:
        self.status_filter = status_filter

    def sort_by(self, field: SortField) -> None:
        self.sort_field, self.sort_direction = toggle_sort(self.sort_field, self.sort_direction, field)

    def find(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with self._lock:
            return next((r for r in self._records if r.attendance_id == attendance_id), None)

    def replace(self, updated: AttendanceRecord) -> None:
        with self._lock:
            self._records = [updated if r.attendance_id == updated.attendance_id else r for r in self._records]

    def begin_refresh(self) -> int:
        with self._lock:
            self._issued_seq += 1
            return self._issued_seq

    def apply_refresh(self, seq: int, records: Sequence[AttendanceRecord]) -> bool:
        """Apply a fetch result only if no newer fetch was issued after it."""
        with self._lock:
            if seq != self._issued_seq:
                return False
            self._records = list(records)
            self._applied_seq = seq
            return True
