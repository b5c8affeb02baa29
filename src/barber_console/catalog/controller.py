from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import admin_required
from ..core.exceptions import ApiError, ValidationError
from ..container import Container
from .service import search_services

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/servicos", endpoint="admin_services")
    @admin_required
    def admin_services():
        search = request.args.get("q", "")
        editing_id = request.args.get("editar", type=int)
        try:
            services = container.catalog_service.list_services()
        except ApiError as e:
            flash(e.user_message("Erro ao carregar serviços"), "danger")
            services = []

        editing = next((s for s in services if s.service_id == editing_id), None)
        return render_template(
            "admin/services.html",
            services=search_services(services, search),
            search=search,
            editing=editing,
            active_page="admin_services",
        )

    @app.route("/admin/servicos/salvar", methods=["POST"], endpoint="admin_service_save")
    @admin_required
    def admin_service_save():
        service_id = request.form.get("service_id", type=int)
        try:
            container.catalog_service.save(
                service_id=service_id,
                name=request.form.get("name", ""),
                price=request.form.get("price", ""),
                duration_minutes=request.form.get("duration_minutes", ""),
                description=request.form.get("description", ""),
            )
            flash("Serviço atualizado" if service_id else "Serviço criado", "success")
        except ValidationError as e:
            flash(str(e), "warning")
            if service_id:
                return redirect(url_for("admin_services", editar=service_id))
        except ApiError as e:
            logger.warning("Saving service %s failed: %s", service_id, e)
            flash(e.user_message("Erro ao salvar serviço"), "danger")

        return redirect(url_for("admin_services"))

    @app.route("/admin/servicos/<int:service_id>/inativar", methods=["POST"], endpoint="admin_service_deactivate")
    @admin_required
    def admin_service_deactivate(service_id: int):
        try:
            container.catalog_service.deactivate(service_id)
            flash("Serviço inativado", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except ApiError as e:
            flash(e.user_message("Erro ao inativar serviço"), "danger")
        return redirect(url_for("admin_services"))
