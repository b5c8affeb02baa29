from __future__ import annotations

import csv
import io
import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..catalog.cart import ServiceSelection
from ..common.web import admin_required, client_required, current_session
from ..core.constants import SELECTION_SESSION_KEY
from ..core.enums import PaymentMethod, SortField, StatusFilter
from ..core.exceptions import ApiError, ValidationError
from ..container import Container
from .board import AttendanceBoard, parse_sort_direction, parse_sort_field, parse_status_filter, toggle_sort

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "id",
    "client",
    "phone",
    "services",
    "total",
    "status_label",
    "payment_label",
    "payment_method",
]


def register(app: Flask, container: Container) -> None:
    def _board_args(source) -> dict:
        return {
            "status_filter": parse_status_filter(source.get("status")),
            "sort_field": parse_sort_field(source.get("sort")),
            "sort_direction": parse_sort_direction(source.get("dir")),
        }

    def _board_query(board: AttendanceBoard) -> dict:
        return {
            "status": board.status_filter.value,
            "sort": board.sort_field.value,
            "dir": board.sort_direction.value,
        }

    def _sort_links(board: AttendanceBoard) -> dict:
        links = {}
        for field in SortField:
            new_field, new_direction = toggle_sort(board.sort_field, board.sort_direction, field)
            links[field.value] = url_for(
                "admin_attendances",
                status=board.status_filter.value,
                sort=new_field.value,
                dir=new_direction.value,
            )
        return links

    # -- admin: attendance board ---------------------------------------------

    @app.route("/admin/atendimentos", endpoint="admin_attendances")
    @admin_required
    def admin_attendances():
        args = _board_args(request.args)
        try:
            board = container.attendance_service.load_board(**args)
        except ApiError as e:
            logger.warning("Loading attendance board failed: %s", e)
            flash(e.user_message("Erro ao carregar atendimentos"), "danger")
            board = AttendanceBoard(**args)

        return render_template(
            "admin/attendances.html",
            board=board,
            rows=board.visible(),
            stats=board.stats,
            filters=list(StatusFilter),
            sort_links=_sort_links(board),
            query=_board_query(board),
            poll_interval=int(app.config.get("POLL_INTERVAL_SECONDS", 5)),
            active_page="admin_attendances",
        )

    @app.route("/admin/atendimentos/dados", endpoint="admin_attendances_data")
    @admin_required
    def admin_attendances_data():
        seq = request.args.get("seq", type=int, default=0)
        try:
            board = container.attendance_service.load_board(**_board_args(request.args))
        except ApiError as e:
            logger.warning("Attendance refresh #%s failed: %s", seq, e)
            return jsonify({"seq": seq, "message": e.user_message("Erro ao carregar atendimentos")}), 502

        return jsonify(
            {
                "seq": seq,
                "stats": board.stats.to_dict(),
                "rows": container.attendance_service.to_rows(board.visible()),
            }
        )

    @app.route("/admin/atendimentos/<int:attendance_id>/avancar", methods=["POST"], endpoint="admin_attendance_advance")
    @admin_required
    def admin_attendance_advance(attendance_id: int):
        query = _board_query(AttendanceBoard(**_board_args(request.form)))
        try:
            board = container.attendance_service.load_board()
            record = board.find(attendance_id)
            if record is None:
                raise ValidationError("Atendimento não encontrado")
            container.attendance_service.advance(record, board=board)
            flash("Status atualizado", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except ApiError as e:
            logger.warning("Advancing attendance %s failed: %s", attendance_id, e)
            flash(e.user_message("Erro ao atualizar status"), "danger")

        return redirect(url_for("admin_attendances", **query))

    @app.route("/admin/atendimentos/exportar.csv", endpoint="admin_attendances_export")
    @admin_required
    def admin_attendances_export():
        try:
            board = container.attendance_service.load_board(**_board_args(request.args))
        except ApiError as e:
            flash(e.user_message("Erro ao exportar atendimentos"), "danger")
            return redirect(url_for("admin_attendances", **request.args))

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in container.attendance_service.to_rows(board.visible()):
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=atendimentos.csv"},
        )

    # -- client: booking flow ------------------------------------------------

    def _load_selection() -> ServiceSelection | None:
        return ServiceSelection.from_session(session.get(SELECTION_SESSION_KEY))

    @app.route("/cliente/atendimento/iniciar", methods=["GET", "POST"], endpoint="booking_start")
    @client_required
    def booking_start():
        selection = _load_selection() or ServiceSelection()
        try:
            services = container.catalog_service.list_bookable()
        except ApiError as e:
            flash(e.user_message("Erro ao carregar serviços"), "danger")
            services = []

        if request.method == "POST":
            toggle_id = request.form.get("toggle", type=int)
            if toggle_id:
                selection.toggle(toggle_id)
                session[SELECTION_SESSION_KEY] = selection.to_session(services)
            elif selection.is_empty():
                flash("Selecione pelo menos um serviço", "warning")
            else:
                session[SELECTION_SESSION_KEY] = selection.to_session(services)
                return redirect(url_for("booking_summary"))

        return render_template(
            "client/booking_start.html",
            services=services,
            selection=selection,
            total_price=selection.total_price(services),
            total_minutes=selection.total_minutes(services),
        )

    @app.route("/cliente/atendimento/resumo", endpoint="booking_summary")
    @client_required
    def booking_summary():
        selection = _load_selection()
        if selection is None or selection.is_empty():
            return redirect(url_for("booking_start"))
        try:
            services = container.catalog_service.list_services()
        except ApiError as e:
            logger.warning("Loading services for summary failed: %s", e)
            return redirect(url_for("booking_start"))

        return render_template(
            "client/booking_summary.html",
            services=selection.chosen(services),
            total_price=selection.total_price(services),
            total_minutes=selection.total_minutes(services),
        )

    @app.route("/cliente/atendimento/pagamento", methods=["GET", "POST"], endpoint="booking_payment")
    @client_required
    def booking_payment():
        selection = _load_selection()
        if selection is None or selection.is_empty():
            return redirect(url_for("booking_start"))

        if request.method == "POST":
            store = current_session()
            try:
                container.attendance_service.book(
                    client_id=store.client.client_id,
                    selection=selection,
                    payment_method=request.form.get("payment_method"),
                )
                session.pop(SELECTION_SESSION_KEY, None)
                store.logout_client()
                flash("Pagamento confirmado! Atendimento criado com sucesso.", "success")
                return redirect(url_for("home"))
            except ValidationError as e:
                flash(str(e), "warning")
            except ApiError as e:
                logger.warning("Booking failed: %s", e)
                flash(e.user_message("Erro ao confirmar pagamento. Tente novamente."), "danger")

        stored = session.get(SELECTION_SESSION_KEY) or {}
        return render_template(
            "client/booking_payment.html",
            methods=list(PaymentMethod),
            total_price=stored.get("totalPrice", "0"),
            total_minutes=stored.get("totalMinutes", 0),
        )
