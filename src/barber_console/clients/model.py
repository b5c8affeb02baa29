from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..api.payload import to_optional_datetime, to_optional_str


@dataclass(frozen=True)
class Client:
    """Entidade de domínio: Cliente da barbearia.

    Note: Mirrors the API's client object; also used as the logged-in client profile.
    """

    client_id: int
    name: str
    cpf: str
    phone: str
    email: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_visit: Optional[datetime] = None


@dataclass(frozen=True)
class ClientDraft:
    """Normalized form input, ready to be sent to the API."""

    name: str
    cpf: str
    phone: str
    email: Optional[str]

    def to_payload(self) -> dict:
        return {"name": self.name, "cpf": self.cpf, "phone": self.phone, "email": self.email}


def client_from_api(row: dict) -> Client:
    status = row.get("status")
    is_active = row.get("is_active")
    if is_active is None:
        is_active = status != "inactive"
    return Client(
        client_id=int(row["id"]),
        name=str(row["name"]),
        cpf=str(row.get("cpf") or ""),
        phone=str(row.get("phone") or ""),
        email=to_optional_str(row.get("email")),
        is_active=bool(is_active),
        created_at=to_optional_datetime(row.get("created_at")),
        last_visit=to_optional_datetime(row.get("last_visit")),
    )


def client_to_api(client: Client) -> dict:
    return {
        "id": client.client_id,
        "name": client.name,
        "cpf": client.cpf,
        "phone": client.phone,
        "email": client.email,
        "is_active": client.is_active,
        "created_at": client.created_at.isoformat() if client.created_at else None,
        "last_visit": client.last_visit.isoformat() if client.last_visit else None,
    }
