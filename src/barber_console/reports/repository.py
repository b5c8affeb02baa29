from __future__ import annotations

from typing import Protocol, Sequence

from .model import DashboardSummary, PeriodSummary, RecentActivity, RevenuePoint, TopClient


class ReportRepository(Protocol):
    def get_summary(self) -> DashboardSummary:
        raise NotImplementedError

    def get_recent_activities(self, *, limit: int) -> Sequence[RecentActivity]:
        raise NotImplementedError

    def get_period_summary(self, params: dict) -> PeriodSummary:
        raise NotImplementedError

    def get_top_clients(self) -> Sequence[TopClient]:
        raise NotImplementedError

    def get_revenue_chart(self, params: dict) -> Sequence[RevenuePoint]:
        raise NotImplementedError

    def export(self, params: dict) -> bytes:
        """Spreadsheet (xlsx) generated by the API."""

        raise NotImplementedError
