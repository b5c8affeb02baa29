from __future__ import annotations

from typing import Tuple

from ..core.exceptions import ApiError, AuthenticationError, FormValidationError, SessionExpiredError
from .model import AdminProfile
from .repository import AdminRepository


class AdminAuthService:
    """Use case: authenticate an admin against the API (login)."""

    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def login(self, username: str, password: str) -> Tuple[AdminProfile, str]:
        errors: dict[str, str] = {}
        if not (username or "").strip():
            errors["username"] = "Username é obrigatório"
        if not (password or "").strip():
            errors["password"] = "Senha é obrigatória"
        if errors:
            raise FormValidationError(errors)

        try:
            return self._admins.login(username.strip(), password)
        except SessionExpiredError:
            raise AuthenticationError("Usuário ou senha inválidos")
        except ApiError as e:
            if e.status_code in (400, 403, 404):
                raise AuthenticationError(e.user_message("Usuário ou senha inválidos"))
            raise
