from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError


def parse_decimal(value, field_name: str) -> Decimal:
    """Accept 35, '35.5' or the pt_BR form '35,50'."""
    raw = str(value if value is not None else "").strip().replace(",", ".")
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise ValidationError(f"{field_name} inválido")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} inválido")
    return amount


def parse_positive_int(value, field_name: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")
    if number <= 0:
        raise ValidationError(f"{field_name} deve ser maior que zero")
    return number
