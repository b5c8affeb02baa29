from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ClientStatusFilter
from .model import Client, ClientDraft


class ClientRepository(Protocol):
    """Repository interface for clients.

    Note (DIP): services depend on this interface, not on a concrete API gateway.
    """

    def login(self, identifier: str) -> Client:
        raise NotImplementedError

    def register(self, draft: ClientDraft) -> Client:
        """Public self-registration endpoint."""

        raise NotImplementedError

    def list_admin_view(self, status: ClientStatusFilter) -> Sequence[Client]:
        raise NotImplementedError

    def get_by_id(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    def create(self, draft: ClientDraft) -> Client:
        raise NotImplementedError

    def update(self, client_id: int, draft: ClientDraft) -> Client:
        raise NotImplementedError

    def delete_by_id(self, client_id: int) -> None:
        raise NotImplementedError

    def reactivate(self, client_id: int) -> None:
        raise NotImplementedError

    def auto_inactivate(self) -> str:
        """Returns the API's summary message."""

        raise NotImplementedError
