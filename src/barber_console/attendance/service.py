from __future__ import annotations

from typing import Optional, Sequence

from ..catalog.cart import ServiceSelection
from ..common.datetime_utils import shop_now_iso
from ..common.display import payment_label, payment_method_label, status_label
from ..core.enums import PaymentMethod, SortDirection, SortField, StatusFilter
from ..core.exceptions import ValidationError
from .board import AttendanceBoard, can_advance, next_status
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_today(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_today()

    def load_board(
        self,
        *,
        status_filter: StatusFilter = StatusFilter.ALL,
        sort_field: SortField = SortField.ID,
        sort_direction: SortDirection = SortDirection.DESC,
    ) -> AttendanceBoard:
        board = AttendanceBoard(status_filter=status_filter, sort_field=sort_field, sort_direction=sort_direction)
        board.apply_refresh(board.begin_refresh(), self._attendance.list_today())
        return board

    def advance(self, record: AttendanceRecord, *, board: Optional[AttendanceBoard] = None) -> AttendanceRecord:
        """Move a record one step forward and trust the server's answer.

        Nothing is changed locally before the API confirms, so a failure (ApiError)
        leaves `board` exactly as it was.
        """
        if not can_advance(record.status):
            raise ValidationError("Atendimento já finalizado")

        updated = self._attendance.update_status(record.attendance_id, next_status(record.status))
        if board is not None:
            board.replace(updated)
        return updated

    def history_for_client(self, client_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_client(int(client_id))

    def book(
        self,
        *,
        client_id: int,
        selection: Optional[ServiceSelection],
        payment_method: Optional[str],
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        if selection is None or selection.is_empty():
            raise ValidationError("Selecione pelo menos um serviço")
        try:
            method = PaymentMethod(payment_method or "")
        except ValueError:
            raise ValidationError("Selecione uma forma de pagamento")

        return self._attendance.create(
            NewAttendance(
                client_id=int(client_id),
                appointment_date=shop_now_iso(),
                payment_method=method.value,
                service_ids=list(selection.service_ids),
                notes=(notes or "").strip() or None,
            )
        )

    @staticmethod
    def to_rows(records: Sequence[AttendanceRecord]) -> list[dict]:
        """Flatten records for the JSON refresh endpoint and CSV export."""
        return [
            {
                "id": r.attendance_id,
                "client": r.client.name,
                "phone": r.client.phone,
                "services": ", ".join(f"{s.name} - R$ {s.price:.2f}" for s in r.services),
                "service_count": len(r.services),
                "total": f"{r.total_price:.2f}",
                "status": r.status.value,
                "status_label": status_label(r.status.value),
                "payment_status": r.payment_status.value,
                "payment_label": payment_label(r.payment_status.value),
                "payment_method": payment_method_label(r.payment_method),
                "can_advance": can_advance(r.status),
            }
            for r in records
        ]
