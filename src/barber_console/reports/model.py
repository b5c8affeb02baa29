from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..api.payload import to_decimal, to_optional_datetime, to_optional_str


@dataclass(frozen=True)
class Growth:
    """Percent change against the previous period, per metric."""

    revenue: float = 0.0
    clients: float = 0.0
    attendances: float = 0.0
    average_ticket: float = 0.0


@dataclass(frozen=True)
class DashboardSummary:
    total_clients: int
    total_attendances: int
    total_revenue: Decimal
    inactive_clients: int
    today_attendances: int
    pending_payments: int
    growth: Growth = field(default_factory=Growth)

    @property
    def inactive_share(self) -> float:
        if self.total_clients <= 0:
            return 0.0
        return self.inactive_clients / self.total_clients * 100


@dataclass(frozen=True)
class RecentActivity:
    activity_id: int
    type: str
    title: str
    description: str
    timestamp: Optional[datetime]


@dataclass(frozen=True)
class PeriodSummary:
    total_revenue: Decimal
    total_clients: int
    total_attendances: int
    average_ticket: Decimal
    growth: Growth = field(default_factory=Growth)


@dataclass(frozen=True)
class TopClient:
    client_id: int
    name: str
    phone: str
    total_visits: int
    total_revenue: Decimal
    last_visit: Optional[datetime]
    is_active: bool


@dataclass(frozen=True)
class RevenuePoint:
    label: str
    revenue: Decimal


@dataclass(frozen=True)
class PeriodReport:
    summary: PeriodSummary
    top_clients: list[TopClient]
    revenue: list[RevenuePoint]


def _growth_from_api(row: Optional[dict]) -> Growth:
    row = row or {}
    return Growth(
        revenue=float(row.get("revenueGrowth") or 0),
        clients=float(row.get("clientsGrowth") or 0),
        attendances=float(row.get("attendancesGrowth") or 0),
        average_ticket=float(row.get("averageTicketGrowth") or 0),
    )


def dashboard_from_api(row: dict) -> DashboardSummary:
    return DashboardSummary(
        total_clients=int(row.get("totalClients") or 0),
        total_attendances=int(row.get("totalAttendances") or 0),
        total_revenue=to_decimal(row.get("totalRevenue")),
        inactive_clients=int(row.get("inactiveClients") or 0),
        today_attendances=int(row.get("todayAttendances") or 0),
        pending_payments=int(row.get("pendingPayments") or 0),
        growth=_growth_from_api(row.get("growthPercentages")),
    )


def activity_from_api(row: dict) -> RecentActivity:
    return RecentActivity(
        activity_id=int(row["id"]),
        type=str(row.get("type") or ""),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        timestamp=to_optional_datetime(row.get("timestamp")),
    )


def period_summary_from_api(row: dict) -> PeriodSummary:
    return PeriodSummary(
        total_revenue=to_decimal(row.get("totalRevenue")),
        total_clients=int(row.get("totalClients") or 0),
        total_attendances=int(row.get("totalAttendances") or 0),
        average_ticket=to_decimal(row.get("averageTicket")),
        growth=_growth_from_api(row.get("growthPercentages")),
    )


def top_client_from_api(row: dict) -> TopClient:
    return TopClient(
        client_id=int(row["id"]),
        name=str(row["name"]),
        phone=to_optional_str(row.get("phone")) or "",
        total_visits=int(row.get("totalVisits") or 0),
        total_revenue=to_decimal(row.get("totalRevenue")),
        last_visit=to_optional_datetime(row.get("lastVisit")),
        is_active=row.get("status", "active") == "active",
    )


def revenue_point_from_api(row: dict) -> RevenuePoint:
    return RevenuePoint(label=str(row["label"]), revenue=to_decimal(row.get("revenue")))
