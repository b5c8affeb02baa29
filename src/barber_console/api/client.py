from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import ApiError, ApiSchemaError, ApiUnavailableError, SessionExpiredError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_API_TIMEOUT_SECONDS


class ApiClient:
    """Thin JSON client for the barbershop API.

    Note: One `requests.Session` is shared for connection reuse; the bearer token
    is looked up per call so the same client serves every logged-in admin.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        session: Optional[requests.Session] = None,
        token_provider: Optional[TokenProvider] = None,
    ):
        self._config = config
        self._session = session or requests.Session()
        self._token_provider = token_provider

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, method: str, path: str, *, params: Optional[dict] = None, json: Any = None) -> requests.Response:
        try:
            response = self._session.request(
                method,
                self._url(path),
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._config.timeout,
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.error("API %s %s unreachable: %s", method, path, e)
            raise ApiUnavailableError("API indisponível") from e

        if response.status_code == 401:
            logger.warning("API %s %s -> 401", method, path)
            raise SessionExpiredError("Sessão expirada. Faça login novamente.")

        if not 200 <= response.status_code < 300:
            detail = _error_detail(response)
            logger.warning("API %s %s -> %s %s", method, path, response.status_code, detail or "")
            raise ApiError(
                f"API respondeu {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )
        return response

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self._send(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiSchemaError("Resposta inválida da API", status_code=response.status_code) from e

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self._json("GET", path, params=params)

    def post(self, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        return self._json("POST", path, json=json, params=params)

    def put(self, path: str, *, json: Any = None) -> Any:
        return self._json("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self._json("DELETE", path)

    def get_bytes(self, path: str, *, params: Optional[dict] = None) -> bytes:
        return self._send("GET", path, params=params).content


def _error_detail(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return None
