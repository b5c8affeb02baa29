from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..api.payload import to_decimal, to_optional_str
from ..core.constants import DEFAULT_SERVICE_DURATION_MINUTES


@dataclass(frozen=True)
class Service:
    """Entidade de domínio: Serviço oferecido pela barbearia."""

    service_id: int
    name: str
    price: Decimal
    duration_minutes: int = DEFAULT_SERVICE_DURATION_MINUTES
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class ServiceDraft:
    name: str
    price: Decimal
    duration_minutes: int
    description: Optional[str] = None

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "price": float(self.price),
            "duration_minutes": self.duration_minutes,
        }


def service_from_api(row: dict) -> Service:
    return Service(
        service_id=int(row["id"]),
        name=str(row["name"]),
        price=to_decimal(row.get("price")),
        duration_minutes=int(row.get("duration_minutes") or 0),
        description=to_optional_str(row.get("description")),
        is_active=bool(row.get("is_active", True)),
    )
