from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.display import bar_widths
from ..common.web import admin_required
from ..core.enums import ReportPeriod
from ..core.exceptions import ApiError, ValidationError
from ..container import Container
from .service import ReportFilters

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _filters() -> ReportFilters:
        return container.report_service.build_filters(
            period=request.args.get("period"),
            start=request.args.get("start_date"),
            end=request.args.get("end_date"),
        )

    @app.route("/admin/relatorios", endpoint="admin_reports")
    @admin_required
    def admin_reports():
        report = None
        try:
            filters = _filters()
        except ValidationError as e:
            flash(str(e), "warning")
            filters = ReportFilters()

        try:
            report = container.report_service.period_report(filters)
        except ApiError as e:
            logger.warning("Loading period report failed: %s", e)
            flash(e.user_message("Erro ao carregar relatórios"), "danger")

        widths = bar_widths([p.revenue for p in report.revenue]) if report else []
        return render_template(
            "admin/reports.html",
            report=report,
            bars=list(zip(report.revenue, widths)) if report else [],
            filters=filters,
            periods=list(ReportPeriod),
            active_page="admin_reports",
        )

    @app.route("/admin/relatorios/exportar", endpoint="admin_reports_export")
    @admin_required
    def admin_reports_export():
        try:
            export = container.report_service.export(_filters())
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_reports"))
        except ApiError as e:
            logger.warning("Report export failed: %s", e)
            flash(e.user_message("Erro ao exportar relatório"), "danger")
            return redirect(url_for("admin_reports", **request.args))

        return app.response_class(
            export.content,
            mimetype=export.mimetype,
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
