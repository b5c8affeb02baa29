from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Etapas do atendimento; só avançam para frente."""

    WAITING = "waiting"
    PROGRESS = "progress"
    FINISHED = "finished"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Formas de pagamento aceitas no fechamento do atendimento."""

    CASH = "cash"
    CARD = "card"
    PIX = "pix"


class StatusFilter(str, Enum):
    ALL = "all"
    WAITING = "waiting"
    PROGRESS = "progress"
    FINISHED = "finished"


class SortField(str, Enum):
    ID = "id"
    CLIENT = "client"
    SERVICES = "services"
    STATUS = "status"
    PAYMENT = "payment"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ClientStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class ReportPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
