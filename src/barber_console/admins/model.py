from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..api.payload import to_optional_str


@dataclass(frozen=True)
class AdminProfile:
    """Perfil do administrador autenticado (sem o token)."""

    admin_id: int
    name: str
    username: str
    email: Optional[str] = None


def admin_from_api(row: dict) -> AdminProfile:
    return AdminProfile(
        admin_id=int(row["id"]),
        name=str(row.get("name") or row["username"]),
        username=str(row["username"]),
        email=to_optional_str(row.get("email")),
    )


def admin_to_api(admin: AdminProfile) -> dict:
    return {"id": admin.admin_id, "name": admin.name, "username": admin.username, "email": admin.email}
