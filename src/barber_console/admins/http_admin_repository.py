from __future__ import annotations

from typing import Tuple

from ..api.client import ApiClient
from ..api.payload import as_dict, map_one
from ..core.exceptions import ApiSchemaError
from .model import AdminProfile, admin_from_api
from .repository import AdminRepository


class HttpAdminRepository(AdminRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def login(self, username: str, password: str) -> Tuple[AdminProfile, str]:
        body = as_dict(self._api.post("/admins/login", json={"username": username, "password": password}), "login")
        token = body.get("access_token")
        if not isinstance(token, str) or not token:
            raise ApiSchemaError("Resposta inválida da API (login): token ausente")
        return map_one(body.get("admin"), "administrador", admin_from_api), token
