from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient
from ..api.payload import map_one, map_rows
from .model import (
    DashboardSummary,
    PeriodSummary,
    RecentActivity,
    RevenuePoint,
    TopClient,
    activity_from_api,
    dashboard_from_api,
    period_summary_from_api,
    revenue_point_from_api,
    top_client_from_api,
)
from .repository import ReportRepository


class HttpReportRepository(ReportRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def get_summary(self) -> DashboardSummary:
        return map_one(self._api.get("/admin/reports/summary"), "resumo", dashboard_from_api)

    def get_recent_activities(self, *, limit: int) -> Sequence[RecentActivity]:
        payload = self._api.get("/admin/reports/recent-activities", params={"limit": int(limit)})
        return map_rows(payload, "atividades recentes", activity_from_api)

    def get_period_summary(self, params: dict) -> PeriodSummary:
        payload = self._api.get("/admin/reports/summary-by-period", params=params)
        return map_one(payload, "resumo do período", period_summary_from_api)

    def get_top_clients(self) -> Sequence[TopClient]:
        return map_rows(self._api.get("/admin/reports/top-clients"), "melhores clientes", top_client_from_api)

    def get_revenue_chart(self, params: dict) -> Sequence[RevenuePoint]:
        payload = self._api.get("/admin/reports/revenue-chart", params=params)
        return map_rows(payload, "receita", revenue_point_from_api)

    def export(self, params: dict) -> bytes:
        return self._api.get_bytes("/admin/reports/export", params=params)
