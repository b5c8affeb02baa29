from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, flash, has_request_context, redirect, session, url_for

from ..auth.session import SessionStore
from . import display
from .formatters import format_document, format_phone


def current_session() -> SessionStore:
    return SessionStore(session)


def session_admin_token() -> Optional[str]:
    """Token provider for the API client: the admin token of the current browser."""
    if not has_request_context():
        return None
    return current_session().admin_token


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session().is_admin():
            flash("Faça login como administrador para continuar", "warning")
            return redirect(url_for("admin_login"))
        return view(*args, **kwargs)

    return wrapper


def client_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session().is_client():
            flash("Faça login para continuar", "warning")
            return redirect(url_for("client_login"))
        return view(*args, **kwargs)

    return wrapper


def register_template_helpers(app: Flask) -> None:
    app.jinja_env.filters.update(
        currency=display.format_currency,
        date_br=display.format_date_br,
        duration=display.format_duration,
        time_ago=display.format_time_ago,
        growth=display.format_growth,
        document=format_document,
        phone=format_phone,
        status_label=display.status_label,
        payment_label=display.payment_label,
        payment_method_label=display.payment_method_label,
        whatsapp=display.whatsapp_url,
    )

    @app.context_processor
    def inject_session():
        store = current_session()
        return {"current_client": store.client, "current_admin": store.admin}
