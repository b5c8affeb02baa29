from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import MutableMapping, Optional, Tuple, Union

from ..admins.model import AdminProfile, admin_from_api, admin_to_api
from ..clients.model import Client, client_from_api, client_to_api
from ..core.constants import ADMIN_SESSION_KEY, CLIENT_SESSION_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSession:
    profile: AdminProfile
    token: str


class SessionStore:
    """Logged-in client/admin state over a persisted key-value mapping.

    Lifecycle: `load()` at start, `login_*` on login, `logout_*` on logout and
    `clear_on_unauthorized()` when the API answers 401. In the web app the mapping
    is Flask's signed-cookie session, so the state lives in the browser.
    """

    def __init__(self, storage: MutableMapping):
        self._storage = storage
        self._client: Optional[Client] = None
        self._admin: Optional[AdminSession] = None
        self.load()

    def load(self) -> None:
        self._client = None
        self._admin = None

        raw_client = self._storage.get(CLIENT_SESSION_KEY)
        if raw_client is not None:
            try:
                self._client = client_from_api(dict(raw_client))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping unreadable client session entry")
                self._storage.pop(CLIENT_SESSION_KEY, None)

        raw_admin = self._storage.get(ADMIN_SESSION_KEY)
        if raw_admin is not None:
            try:
                data = dict(raw_admin)
                self._admin = AdminSession(profile=admin_from_api(data), token=str(data.get("token") or ""))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping unreadable admin session entry")
                self._storage.pop(ADMIN_SESSION_KEY, None)

    # -- client -------------------------------------------------------------

    def login_client(self, client: Client) -> None:
        self._client = client
        self._storage[CLIENT_SESSION_KEY] = client_to_api(client)

    def update_client(self, client: Client) -> None:
        self.login_client(client)

    def logout_client(self) -> None:
        self._client = None
        self._storage.pop(CLIENT_SESSION_KEY, None)

    # -- admin --------------------------------------------------------------

    def login_admin(self, profile: AdminProfile, token: str) -> None:
        self._admin = AdminSession(profile=profile, token=token)
        self._storage[ADMIN_SESSION_KEY] = {**admin_to_api(profile), "token": token}

    def update_admin(self, profile: AdminProfile) -> None:
        token = self._admin.token if self._admin else ""
        self.login_admin(profile, token)

    def logout_admin(self) -> None:
        self._admin = None
        self._storage.pop(ADMIN_SESSION_KEY, None)

    def clear_on_unauthorized(self) -> None:
        # Only the admin carries a bearer token, so only it is purged on 401.
        self.logout_admin()

    # -- queries ------------------------------------------------------------

    @property
    def client(self) -> Optional[Client]:
        return self._client

    @property
    def admin(self) -> Optional[AdminProfile]:
        return self._admin.profile if self._admin else None

    @property
    def admin_token(self) -> Optional[str]:
        return self._admin.token if self._admin and self._admin.token else None

    def is_client(self) -> bool:
        return self._client is not None

    def is_admin(self) -> bool:
        return self.admin_token is not None

    def is_authenticated(self) -> bool:
        return self.is_admin() or self.is_client()

    def current_user(self) -> Optional[Tuple[str, Union[AdminProfile, Client]]]:
        if self.is_admin():
            return "admin", self._admin.profile
        if self.is_client():
            return "client", self._client
        return None
