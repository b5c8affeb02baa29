from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..api.payload import to_decimal, to_optional_datetime, to_optional_int, to_optional_str
from ..core.enums import AttendanceStatus, PaymentStatus


@dataclass(frozen=True)
class AttendanceClient:
    name: str
    phone: str
    client_id: Optional[int] = None


@dataclass(frozen=True)
class ServiceLine:
    name: str
    price: Decimal


@dataclass(frozen=True)
class AttendanceRecord:
    """Entidade de domínio: Atendimento (cliente + serviços do dia)."""

    attendance_id: int
    client: AttendanceClient
    services: tuple[ServiceLine, ...]
    status: AttendanceStatus
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    appointment_date: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def total_price(self) -> Decimal:
        return sum((s.price for s in self.services), Decimal("0"))


@dataclass(frozen=True)
class NewAttendance:
    client_id: int
    appointment_date: str
    payment_method: str
    service_ids: list[int] = field(default_factory=list)
    notes: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "client_id": self.client_id,
            "appointment_date": self.appointment_date,
            "payment_method": self.payment_method,
            "notes": self.notes,
            "service_ids": list(self.service_ids),
        }


def attendance_from_api(row: dict) -> AttendanceRecord:
    client = row.get("client") or {}
    return AttendanceRecord(
        attendance_id=int(row["id"]),
        client=AttendanceClient(
            name=str(client["name"]),
            phone=str(client.get("phone") or ""),
            client_id=to_optional_int(client.get("id", row.get("client_id"))),
        ),
        services=tuple(
            ServiceLine(name=str(s["name"]), price=to_decimal(s.get("price")))
            for s in (row.get("services") or [])
        ),
        status=AttendanceStatus(row["status"]),
        payment_status=PaymentStatus(row.get("payment_status") or PaymentStatus.PENDING.value),
        payment_method=to_optional_str(row.get("payment_method")),
        appointment_date=to_optional_datetime(row.get("appointment_date")),
        notes=to_optional_str(row.get("notes")),
    )
