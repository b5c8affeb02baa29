from __future__ import annotations

from typing import Protocol, Sequence

from .model import Service, ServiceDraft


class ServiceRepository(Protocol):
    def list_all(self) -> Sequence[Service]:
        raise NotImplementedError

    def create(self, draft: ServiceDraft) -> Service:
        raise NotImplementedError

    def update(self, service_id: int, draft: ServiceDraft) -> Service:
        raise NotImplementedError

    def deactivate(self, service_id: int) -> None:
        """The API keeps the row and flags it inactive."""

        raise NotImplementedError
