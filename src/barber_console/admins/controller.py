from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import admin_required, current_session
from ..core.exceptions import ApiError, AuthenticationError, FormValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/login", methods=["GET", "POST"], endpoint="admin_login")
    def admin_login():
        if current_session().is_admin():
            return redirect(url_for("admin_dashboard"))

        errors: dict[str, str] = {}
        username = ""
        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            try:
                profile, token = container.admin_auth_service.login(username, password)
                current_session().login_admin(profile, token)
                logger.info("Admin %s logged in", profile.username)
                flash(f"Bem-vindo, {profile.name}!", "success")
                return redirect(url_for("admin_dashboard"))
            except FormValidationError as e:
                errors = e.errors
            except AuthenticationError as e:
                flash(str(e), "danger")
            except ApiError as e:
                flash(e.user_message("Erro ao fazer login"), "danger")

        return render_template("admin/login.html", username=username, errors=errors)

    @app.route("/admin/logout", endpoint="admin_logout")
    def admin_logout():
        current_session().logout_admin()
        flash("Logout realizado com sucesso", "info")
        return redirect(url_for("admin_login"))

    @app.route("/admin/dashboard", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        try:
            data = container.report_service.dashboard()
        except ApiError as e:
            logger.warning("Loading dashboard failed: %s", e)
            flash(e.user_message("Erro ao carregar dashboard"), "danger")
            data = None

        return render_template("admin/dashboard.html", data=data, active_page="admin_dashboard")
