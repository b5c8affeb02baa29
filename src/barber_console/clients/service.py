from __future__ import annotations

from typing import List, Optional, Sequence

from ..common.formatters import digits_only, is_valid_document, is_valid_email, is_valid_phone, normalize_email
from ..core.constants import DOCUMENT_LENGTH
from ..core.enums import ClientStatusFilter
from ..core.exceptions import AuthenticationError, FormValidationError, SessionExpiredError, ValidationError
from .model import Client, ClientDraft
from .repository import ClientRepository


def validate_client_form(
    *,
    name: str,
    cpf: str,
    phone: str,
    email: Optional[str],
    min_name_length: int = 1,
) -> ClientDraft:
    """Validate a client form and return the normalized draft.

    Admin forms pass `min_name_length=2` and get the more specific CPF/phone
    length messages; the public sign-up keeps the short ones.
    """
    errors: dict[str, str] = {}
    strict = min_name_length > 1

    clean_name = (name or "").strip()
    if not clean_name:
        errors["name"] = "Nome é obrigatório"
    elif len(clean_name) < min_name_length:
        errors["name"] = f"Nome deve ter pelo menos {min_name_length} caracteres"

    cpf_digits = digits_only(cpf)
    if not cpf_digits:
        errors["cpf"] = "CPF é obrigatório"
    elif strict and len(cpf_digits) != DOCUMENT_LENGTH:
        errors["cpf"] = "CPF deve ter 11 dígitos"
    elif not is_valid_document(cpf_digits):
        errors["cpf"] = "CPF inválido"

    phone_digits = digits_only(phone)
    if not phone_digits:
        errors["phone"] = "Telefone é obrigatório"
    elif strict and len(phone_digits) < 10:
        errors["phone"] = "Telefone deve ter pelo menos 10 dígitos"
    elif not is_valid_phone(phone_digits):
        errors["phone"] = "Telefone inválido"

    clean_email = normalize_email(email)
    if clean_email and not is_valid_email(clean_email):
        errors["email"] = "Email inválido"

    if errors:
        raise FormValidationError(errors)

    return ClientDraft(name=clean_name, cpf=cpf_digits, phone=phone_digits, email=clean_email or None)


def search_clients(clients: Sequence[Client], term: str) -> List[Client]:
    needle = (term or "").strip()
    if not needle:
        return list(clients)

    lowered = needle.lower()
    # Documents and phones are stored as digits; compare against the typed digits too.
    needle_digits = digits_only(needle)

    def matches(c: Client) -> bool:
        if lowered in c.name.lower():
            return True
        if needle in c.cpf or needle in c.phone:
            return True
        if needle_digits and (needle_digits in c.cpf or needle_digits in c.phone):
            return True
        return bool(c.email and lowered in c.email.lower())

    return [c for c in clients if matches(c)]


class ClientAuthService:
    """Use case: client login by document or phone, and self sign-up."""

    def __init__(self, clients: ClientRepository):
        self._clients = clients

    @staticmethod
    def normalize_identifier(identifier: str) -> str:
        digits = digits_only(identifier)
        if not digits:
            raise FormValidationError({"identifier": "Informe CPF ou telefone"})
        # 11 digits is either a CPF or a mobile number; the API resolves which.
        if len(digits) not in (10, DOCUMENT_LENGTH):
            raise FormValidationError(
                {"identifier": "Informe um CPF (11 dígitos) ou telefone válido (10-11 dígitos)"}
            )
        return digits

    def login(self, identifier: str) -> Client:
        digits = self.normalize_identifier(identifier)
        try:
            return self._clients.login(digits)
        except SessionExpiredError:
            # Clients carry no token: a 401 here means unknown credentials.
            raise AuthenticationError("Cliente não encontrado")

    def register(self, *, name: str, cpf: str, phone: str, email: Optional[str] = None) -> Client:
        draft = validate_client_form(name=name, cpf=cpf, phone=phone, email=email)
        return self._clients.register(draft)


class ClientService:
    """Use case: manage clients (admin)."""

    def __init__(self, clients: ClientRepository):
        self._clients = clients

    def list_admin_view(
        self,
        *,
        status: ClientStatusFilter = ClientStatusFilter.ALL,
        search: str = "",
    ) -> List[Client]:
        return search_clients(self._clients.list_admin_view(status), search)

    def get(self, client_id: int) -> Client:
        client = self._clients.get_by_id(int(client_id))
        if not client:
            raise ValidationError("Cliente não encontrado")
        return client

    def create(self, *, name: str, cpf: str, phone: str, email: Optional[str] = None) -> Client:
        draft = validate_client_form(name=name, cpf=cpf, phone=phone, email=email, min_name_length=2)
        return self._clients.create(draft)

    def update(self, client_id: int, *, name: str, cpf: str, phone: str, email: Optional[str] = None) -> Client:
        draft = validate_client_form(name=name, cpf=cpf, phone=phone, email=email, min_name_length=2)
        return self._clients.update(int(client_id), draft)

    def delete(self, client_id: int) -> None:
        self._clients.delete_by_id(int(client_id))

    def reactivate(self, client_id: int) -> None:
        self._clients.reactivate(int(client_id))

    def auto_inactivate(self) -> str:
        return self._clients.auto_inactivate()
