from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient
from ..api.payload import map_one, map_rows
from .model import Service, ServiceDraft, service_from_api
from .repository import ServiceRepository


class HttpServiceRepository(ServiceRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def list_all(self) -> Sequence[Service]:
        return map_rows(self._api.get("/services/"), "serviços", service_from_api)

    def create(self, draft: ServiceDraft) -> Service:
        return map_one(self._api.post("/services/", json=draft.to_payload()), "serviço", service_from_api)

    def update(self, service_id: int, draft: ServiceDraft) -> Service:
        payload = self._api.put(f"/services/{int(service_id)}", json=draft.to_payload())
        return map_one(payload, "serviço", service_from_api)

    def deactivate(self, service_id: int) -> None:
        self._api.delete(f"/services/{int(service_id)}")
