"""Presentation helpers shared by templates and CSV exports."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

from babel.dates import format_date
from babel.numbers import format_currency as babel_format_currency

from ..core.enums import AttendanceStatus, PaymentMethod, PaymentStatus
from .datetime_utils import now_utc, to_shop_time
from .formatters import digits_only

LOCALE = "pt_BR"

STATUS_LABELS = {
    AttendanceStatus.WAITING.value: "Aguardando",
    AttendanceStatus.PROGRESS.value: "Em Andamento",
    AttendanceStatus.FINISHED.value: "Finalizado",
}

PAYMENT_LABELS = {
    PaymentStatus.PENDING.value: "Pendente",
    PaymentStatus.PAID.value: "Pago",
    PaymentStatus.CANCELLED.value: "Cancelado",
}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH.value: "Dinheiro",
    PaymentMethod.CARD.value: "Cartão",
    PaymentMethod.PIX.value: "PIX",
}

# Older records carry free-text methods.
_PAYMENT_METHOD_ALIASES = {
    "dinheiro": PaymentMethod.CASH.value,
    "cartão": PaymentMethod.CARD.value,
    "credit": PaymentMethod.CARD.value,
    "debit": PaymentMethod.CARD.value,
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def payment_label(payment_status: str) -> str:
    return PAYMENT_LABELS.get(payment_status, payment_status)


def payment_method_label(method: Optional[str]) -> str:
    if not method:
        return ""
    key = method.lower()
    key = _PAYMENT_METHOD_ALIASES.get(key, key)
    return PAYMENT_METHOD_LABELS.get(key, method)


def format_currency(value) -> str:
    return babel_format_currency(Decimal(str(value or 0)), "BRL", locale=LOCALE)


def format_date_br(value) -> str:
    if not value:
        return "-"
    if isinstance(value, datetime):
        value = to_shop_time(value).date()
    elif not isinstance(value, date):
        return str(value)
    return format_date(value, "dd/MM/yyyy", locale=LOCALE)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes or 0), 60)
    if hours > 0:
        return f"{hours}h {mins}min"
    return f"{mins}min"


def format_time_ago(timestamp: Optional[datetime], *, now: Optional[datetime] = None) -> str:
    if timestamp is None:
        return "-"
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    now = now or now_utc()
    diff_minutes = int((now - timestamp).total_seconds() // 60)
    if diff_minutes < 1:
        return "Agora mesmo"
    if diff_minutes < 60:
        return f"Há {diff_minutes} min"
    hours = diff_minutes // 60
    if hours < 24:
        return f"Há {hours}h"
    days = hours // 24
    if days < 7:
        return f"Há {days} dias"
    return format_date_br(timestamp)


def format_growth(value: Optional[float]) -> str:
    if not value:
        return "0%"
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"


def whatsapp_url(phone: str) -> str:
    return f"https://wa.me/55{digits_only(phone)}"


def bar_widths(values: Sequence) -> list[int]:
    """Percent widths (0-100) of each value relative to the largest one."""
    numbers = [Decimal(str(v or 0)) for v in values]
    top = max(numbers, default=Decimal(0))
    if top <= 0:
        return [0 for _ in numbers]
    return [int((n / top * 100).to_integral_value()) for n in numbers]
