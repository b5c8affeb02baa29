from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common import formatters
from ..common.web import admin_required, client_required, current_session
from ..core.constants import INACTIVITY_DAYS
from ..core.enums import ClientStatusFilter
from ..core.exceptions import ApiError, AuthenticationError, FormValidationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

_MASKS = {
    "cpf": (formatters.format_document, formatters.is_valid_document),
    "telefone": (formatters.format_phone, formatters.is_valid_phone),
    "identificador": (formatters.format_login_identifier, lambda v: len(formatters.digits_only(v)) in (10, 11)),
    "email": (formatters.normalize_email, formatters.is_valid_email),
}


def _client_form() -> dict:
    return {
        "name": request.form.get("name", ""),
        "cpf": request.form.get("cpf", ""),
        "phone": request.form.get("phone", ""),
        "email": request.form.get("email", ""),
    }


def _masked(form: dict) -> dict:
    """Re-display submitted values with the same masks used while typing."""
    return {
        **form,
        "cpf": formatters.format_document(form.get("cpf")),
        "phone": formatters.format_phone(form.get("phone")),
        "email": formatters.normalize_email(form.get("email")),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="home")
    def home():
        return render_template("home.html")

    @app.route("/api/mascara/<kind>", endpoint="mask_value")
    def mask_value(kind: str):
        if kind not in _MASKS:
            return jsonify({"message": "Tipo desconhecido"}), 404
        fmt, is_valid = _MASKS[kind]
        value = request.args.get("value", "")
        return jsonify({"formatted": fmt(value), "valid": bool(is_valid(value))})

    # -- client self-service -------------------------------------------------

    @app.route("/cliente/login", methods=["GET", "POST"], endpoint="client_login")
    def client_login():
        if current_session().is_client():
            return redirect(url_for("client_dashboard"))

        errors: dict[str, str] = {}
        identifier = ""
        if request.method == "POST":
            identifier = request.form.get("identifier", "")
            try:
                client = container.client_auth_service.login(identifier)
                current_session().login_client(client)
                flash(f"Bem-vindo, {client.name}!", "success")
                return redirect(url_for("client_dashboard"))
            except FormValidationError as e:
                errors = e.errors
            except AuthenticationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                flash(e.user_message("Erro ao fazer login"), "danger")

        return render_template(
            "client/login.html",
            identifier=formatters.format_login_identifier(identifier),
            errors=errors,
        )

    @app.route("/cliente/cadastro", methods=["GET", "POST"], endpoint="client_register")
    def client_register():
        form = {"name": "", "cpf": "", "phone": "", "email": ""}
        errors: dict[str, str] = {}
        if request.method == "POST":
            form = _client_form()
            try:
                client = container.client_auth_service.register(**form)
                current_session().login_client(client)
                flash(f"Bem-vindo, {client.name}!", "success")
                return redirect(url_for("client_dashboard"))
            except FormValidationError as e:
                errors = e.errors
            except ApiError as e:
                flash(e.user_message("Erro ao cadastrar"), "danger")

        return render_template("client/register.html", form=_masked(form), errors=errors)

    @app.route("/cliente/dashboard", endpoint="client_dashboard")
    @client_required
    def client_dashboard():
        client = current_session().client
        try:
            attendances = container.attendance_service.history_for_client(client.client_id)
        except ApiError as e:
            logger.warning("Loading history of client %s failed: %s", client.client_id, e)
            attendances = []
        return render_template("client/dashboard.html", client=client, attendances=attendances)

    @app.route("/cliente/logout", endpoint="client_logout")
    def client_logout():
        current_session().logout_client()
        flash("Logout realizado com sucesso", "info")
        return redirect(url_for("home"))

    # -- admin: clients ------------------------------------------------------

    @app.route("/admin/clientes", endpoint="admin_clients")
    @admin_required
    def admin_clients():
        try:
            status = ClientStatusFilter(request.args.get("status") or ClientStatusFilter.ALL.value)
        except ValueError:
            status = ClientStatusFilter.ALL
        search = request.args.get("q", "")

        try:
            clients = container.client_service.list_admin_view(status=status, search=search)
        except ApiError as e:
            flash(e.user_message("Erro ao carregar clientes"), "danger")
            clients = []

        return render_template(
            "admin/clients.html",
            clients=clients,
            status=status.value,
            statuses=list(ClientStatusFilter),
            search=search,
            inactivity_days=INACTIVITY_DAYS,
            active_page="admin_clients",
        )

    @app.route("/admin/clientes/novo", methods=["GET", "POST"], endpoint="admin_client_new")
    @admin_required
    def admin_client_new():
        form = {"name": "", "cpf": "", "phone": "", "email": ""}
        errors: dict[str, str] = {}
        if request.method == "POST":
            form = _client_form()
            try:
                container.client_service.create(**form)
                flash("Cliente cadastrado com sucesso!", "success")
                return redirect(url_for("admin_clients"))
            except FormValidationError as e:
                errors = e.errors
            except ApiError as e:
                flash(e.user_message("Erro ao cadastrar cliente"), "danger")

        return render_template(
            "admin/client_form.html",
            form=_masked(form),
            errors=errors,
            client_id=None,
            active_page="admin_clients",
        )

    @app.route("/admin/clientes/<int:client_id>/editar", methods=["GET", "POST"], endpoint="admin_client_edit")
    @admin_required
    def admin_client_edit(client_id: int):
        errors: dict[str, str] = {}
        if request.method == "POST":
            form = _client_form()
            try:
                container.client_service.update(client_id, **form)
                flash("Cliente atualizado com sucesso!", "success")
                return redirect(url_for("admin_clients"))
            except FormValidationError as e:
                errors = e.errors
            except ApiError as e:
                flash(e.user_message("Erro ao atualizar cliente"), "danger")
        else:
            try:
                client = container.client_service.get(client_id)
            except (ValidationError, ApiError) as e:
                flash("Erro ao carregar dados do cliente", "danger")
                logger.warning("Loading client %s failed: %s", client_id, e)
                return redirect(url_for("admin_clients"))
            form = {"name": client.name, "cpf": client.cpf, "phone": client.phone, "email": client.email or ""}

        return render_template(
            "admin/client_form.html",
            form=_masked(form),
            errors=errors,
            client_id=client_id,
            active_page="admin_clients",
        )

    @app.route("/admin/clientes/<int:client_id>/excluir", methods=["POST"], endpoint="admin_client_delete")
    @admin_required
    def admin_client_delete(client_id: int):
        try:
            container.client_service.delete(client_id)
            flash("Cliente excluído definitivamente com sucesso", "success")
        except ApiError as e:
            flash(e.user_message("Erro ao excluir cliente"), "danger")
        return redirect(url_for("admin_clients"))

    @app.route("/admin/clientes/<int:client_id>/reativar", methods=["POST"], endpoint="admin_client_reactivate")
    @admin_required
    def admin_client_reactivate(client_id: int):
        try:
            container.client_service.reactivate(client_id)
            flash("Cliente reativado com sucesso", "success")
        except ApiError as e:
            flash(e.user_message("Erro ao reativar cliente"), "danger")
        return redirect(url_for("admin_clients"))

    @app.route("/admin/clientes/inativar-automatico", methods=["POST"], endpoint="admin_clients_auto_inactivate")
    @admin_required
    def admin_clients_auto_inactivate():
        try:
            message = container.client_service.auto_inactivate()
            flash(message, "success")
        except ApiError as e:
            flash(e.user_message("Erro ao executar inativação automática"), "danger")
        return redirect(url_for("admin_clients"))
