from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient
from ..api.payload import map_one, map_rows
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, NewAttendance, attendance_from_api
from .repository import AttendanceRepository


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def list_today(self) -> Sequence[AttendanceRecord]:
        return map_rows(self._api.get("/attendance/today"), "atendimentos", attendance_from_api)

    def list_for_client(self, client_id: int) -> Sequence[AttendanceRecord]:
        payload = self._api.get(f"/clients/{int(client_id)}/attendances")
        return map_rows(payload, "atendimentos do cliente", attendance_from_api)

    def update_status(self, attendance_id: int, status: AttendanceStatus) -> AttendanceRecord:
        payload = self._api.put(f"/attendance/{int(attendance_id)}", json={"status": status.value})
        return map_one(payload, "atendimento", attendance_from_api)

    def create(self, attendance: NewAttendance) -> AttendanceRecord:
        payload = self._api.post("/attendance/", json=attendance.to_payload())
        return map_one(payload, "atendimento", attendance_from_api)
