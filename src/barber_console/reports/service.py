from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_iso_date, shop_today
from ..core.constants import DEFAULT_RECENT_ACTIVITIES
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError
from .model import DashboardSummary, PeriodReport, RecentActivity
from .repository import ReportRepository


@dataclass(frozen=True)
class DashboardData:
    summary: DashboardSummary
    activities: list[RecentActivity]


@dataclass(frozen=True)
class ReportFilters:
    period: ReportPeriod = ReportPeriod.MONTH
    start: Optional[date] = None
    end: Optional[date] = None

    def to_params(self) -> dict:
        params = {"period": self.period.value}
        if self.start and self.end:
            params["start_date"] = self.start.isoformat()
            params["end_date"] = self.end.isoformat()
        return params


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ReportService:
    def __init__(self, reports: ReportRepository):
        self._reports = reports

    @staticmethod
    def build_filters(*, period: Optional[str], start: Optional[str], end: Optional[str]) -> ReportFilters:
        try:
            report_period = ReportPeriod(period or ReportPeriod.MONTH.value)
        except ValueError:
            raise ValidationError("Período inválido")

        start_s = (start or "").strip()
        end_s = (end or "").strip()
        if bool(start_s) != bool(end_s):
            raise ValidationError("Informe data inicial e final")
        if not start_s:
            return ReportFilters(period=report_period)

        try:
            start_d = parse_iso_date(start_s)
            end_d = parse_iso_date(end_s)
        except ValueError:
            raise ValidationError("Data inválida (AAAA-MM-DD)")
        if start_d > end_d:
            raise ValidationError("Data inicial deve ser anterior à data final")
        return ReportFilters(period=report_period, start=start_d, end=end_d)

    def dashboard(self, *, activities_limit: int = DEFAULT_RECENT_ACTIVITIES) -> DashboardData:
        return DashboardData(
            summary=self._reports.get_summary(),
            activities=list(self._reports.get_recent_activities(limit=activities_limit)),
        )

    def period_report(self, filters: ReportFilters) -> PeriodReport:
        params = filters.to_params()
        return PeriodReport(
            summary=self._reports.get_period_summary(params),
            top_clients=list(self._reports.get_top_clients()),
            revenue=list(self._reports.get_revenue_chart(params)),
        )

    def export(self, filters: ReportFilters, *, today: Optional[date] = None) -> ExportFile:
        today = today or shop_today()
        content = self._reports.export(filters.to_params())
        return ExportFile(filename=f"relatorio-{today.isoformat()}.xlsx", content=content)
