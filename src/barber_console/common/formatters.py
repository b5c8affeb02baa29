"""Input masks and validators for client identity fields.

Everything here is pure and never raises: callers get formatted strings or
booleans and compose their own messages.
"""

from __future__ import annotations

import re

from ..core.constants import DOCUMENT_LENGTH

_NON_DIGITS = re.compile(r"[^0-9]")
_REPEATED_DIGITS = re.compile(r"^([0-9])\1{10}$")
_EMAIL = re.compile(
    r"^(?:[a-zA-Z0-9_'^&+`{}~!#$%*?/=|-]+(?:\.[a-zA-Z0-9_'^&+`{}~!#$%*?/=|-]+)*)"
    r"@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}$"
)

PHONE_MAX_DIGITS = 11


def digits_only(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def format_document(value: str | None) -> str:
    """Mask a CPF as NNN.NNN.NNN-NN, progressively while it is typed."""
    digits = digits_only(value)[:DOCUMENT_LENGTH]
    if not digits:
        return ""

    out = digits[0:3]
    if digits[3:6]:
        out += f".{digits[3:6]}"
    if digits[6:9]:
        out += f".{digits[6:9]}"
    if digits[9:11]:
        out += f"-{digits[9:11]}"
    return out


def _check_digit(base: str) -> int:
    weight = len(base) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(base))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_document(value: str | None) -> bool:
    cpf = digits_only(value)
    if len(cpf) != DOCUMENT_LENGTH:
        return False
    if _REPEATED_DIGITS.match(cpf):
        return False

    first = _check_digit(cpf[:9])
    second = _check_digit(cpf[:9] + str(first))
    return cpf[9:] == f"{first}{second}"


def format_phone(value: str | None) -> str:
    """Mask a BR phone as (DD) NNNN-NNNN, or (DD) NNNNN-NNNN with 11 digits."""
    digits = digits_only(value)[:PHONE_MAX_DIGITS]
    if not digits:
        return ""

    nine = len(digits) > 10
    mid = digits[2:7] if nine else digits[2:6]
    end = digits[7:11] if nine else digits[6:10]

    out = f"({digits[:2]}"
    if len(digits) >= 2:
        out += ")"
    if mid:
        out += f" {mid}"
    if end:
        out += f"-{end}"
    return out


def is_valid_phone(value: str | None) -> bool:
    return len(digits_only(value)) in (10, 11)


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


def is_valid_email(value: str | None) -> bool:
    email = normalize_email(value)
    if not email:
        return False
    return _EMAIL.match(email) is not None


def format_login_identifier(value: str | None) -> str:
    # Login accepts a document or a phone; mask as document while it still fits.
    if len(digits_only(value)) <= DOCUMENT_LENGTH:
        return format_document(value)
    return format_phone(value)
