from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence

from .model import Service


@dataclass
class ServiceSelection:
    """Services picked by a client during one booking flow.

    Lives in the web session between the booking steps and is discarded once the
    attendance is confirmed.
    """

    service_ids: List[int] = field(default_factory=list)

    def toggle(self, service_id: int) -> None:
        service_id = int(service_id)
        if service_id in self.service_ids:
            self.service_ids = [x for x in self.service_ids if x != service_id]
        else:
            self.service_ids = [*self.service_ids, service_id]

    def is_empty(self) -> bool:
        return not self.service_ids

    def chosen(self, services: Sequence[Service]) -> List[Service]:
        # Catalog order, not click order, like the service list on screen.
        return [s for s in services if s.service_id in self.service_ids]

    def total_price(self, services: Sequence[Service]) -> Decimal:
        return sum((s.price for s in self.chosen(services)), Decimal("0"))

    def total_minutes(self, services: Sequence[Service]) -> int:
        return sum(s.duration_minutes or 0 for s in self.chosen(services))

    def to_session(self, services: Sequence[Service]) -> dict:
        return {
            "service_ids": list(self.service_ids),
            "totalPrice": str(self.total_price(services)),
            "totalMinutes": self.total_minutes(services),
        }

    @classmethod
    def from_session(cls, data: Optional[Mapping[str, Any]]) -> Optional["ServiceSelection"]:
        if not data:
            return None
        try:
            return cls(service_ids=[int(x) for x in data.get("service_ids", [])])
        except (TypeError, ValueError):
            return None
