from __future__ import annotations

from typing import List, Optional, Sequence

from ..common.validators import parse_decimal, parse_positive_int
from ..core.constants import DEFAULT_SERVICE_DURATION_MINUTES
from ..core.exceptions import ValidationError
from .model import Service, ServiceDraft
from .repository import ServiceRepository


def search_services(services: Sequence[Service], term: str) -> List[Service]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(services)
    return [s for s in services if needle in s.name.lower()]


class CatalogService:
    """Use case: manage the service catalog (admin) and list it for booking."""

    def __init__(self, services: ServiceRepository):
        self._services = services

    def list_services(self) -> Sequence[Service]:
        return self._services.list_all()

    def list_bookable(self) -> List[Service]:
        return [s for s in self._services.list_all() if s.is_active]

    def build_draft(
        self,
        *,
        name: str,
        price,
        duration_minutes=None,
        description: Optional[str] = None,
    ) -> ServiceDraft:
        name = (name or "").strip()
        if not name or price in (None, ""):
            raise ValidationError("Preencha nome e preço")

        amount = parse_decimal(price, "Preço")
        if amount <= 0:
            raise ValidationError("Preencha nome e preço")

        if duration_minutes in (None, ""):
            duration_minutes = DEFAULT_SERVICE_DURATION_MINUTES
        minutes = parse_positive_int(duration_minutes, "Duração")

        return ServiceDraft(
            name=name,
            price=amount,
            duration_minutes=minutes,
            description=(description or "").strip() or None,
        )

    def save(
        self,
        *,
        service_id: Optional[int],
        name: str,
        price,
        duration_minutes=None,
        description: Optional[str] = None,
    ) -> Service:
        draft = self.build_draft(name=name, price=price, duration_minutes=duration_minutes, description=description)
        if service_id:
            return self._services.update(int(service_id), draft)
        return self._services.create(draft)

    def deactivate(self, service_id: int) -> None:
        if int(service_id) <= 0:
            raise ValidationError("Serviço inválido")
        self._services.deactivate(int(service_id))
