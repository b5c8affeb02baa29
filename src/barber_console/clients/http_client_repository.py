from __future__ import annotations

from typing import Optional, Sequence

from ..api.client import ApiClient
from ..api.payload import as_dict, map_one, map_rows
from ..core.enums import ClientStatusFilter
from ..core.exceptions import ApiError
from .model import Client, ClientDraft, client_from_api
from .repository import ClientRepository


class HttpClientRepository(ClientRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def login(self, identifier: str) -> Client:
        payload = self._api.post("/clients/login", json={"identifier": identifier})
        return map_one(payload, "cliente", client_from_api)

    def register(self, draft: ClientDraft) -> Client:
        return map_one(self._api.post("/clients/", json=draft.to_payload()), "cliente", client_from_api)

    def list_admin_view(self, status: ClientStatusFilter) -> Sequence[Client]:
        payload = self._api.get("/admin/clients/", params={"status": status.value})
        return map_rows(payload, "clientes", client_from_api)

    def get_by_id(self, client_id: int) -> Optional[Client]:
        try:
            payload = self._api.get(f"/admin/clients/{int(client_id)}")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        return map_one(payload, "cliente", client_from_api)

    def create(self, draft: ClientDraft) -> Client:
        return map_one(self._api.post("/admin/clients/", json=draft.to_payload()), "cliente", client_from_api)

    def update(self, client_id: int, draft: ClientDraft) -> Client:
        payload = self._api.put(f"/admin/clients/{int(client_id)}", json=draft.to_payload())
        return map_one(payload, "cliente", client_from_api)

    def delete_by_id(self, client_id: int) -> None:
        self._api.delete(f"/admin/clients/{int(client_id)}")

    def reactivate(self, client_id: int) -> None:
        self._api.post(f"/admin/clients/{int(client_id)}/reactivate")

    def auto_inactivate(self) -> str:
        body = as_dict(self._api.post("/admin/clients/auto-inactivate") or {}, "inativação automática")
        return str(body.get("message") or "Inativação automática concluída")
