"""Example: use the service layer without Flask.

Controllers are thin; the use cases live in the services, so the same container
can back a script. Needs API_BASE_URL and admin credentials in the environment.
"""

import importlib
import os

from barber_console.auth.session import SessionStore
from barber_console.common.display import format_currency
from barber_console.container import build_container
from barber_console.settings import get_settings_module


def main():
    settings = importlib.import_module(get_settings_module())
    store = SessionStore({})
    container = build_container(api_config=settings.API_CONFIG, token_provider=lambda: store.admin_token)

    profile, token = container.admin_auth_service.login(os.environ["ADMIN_USERNAME"], os.environ["ADMIN_PASSWORD"])
    store.login_admin(profile, token)

    data = container.report_service.dashboard()
    print(f"{profile.name}: {data.summary.today_attendances} atendimentos hoje, faturamento {format_currency(data.summary.total_revenue)}")

    board = container.attendance_service.load_board()
    for row in container.attendance_service.to_rows(board.visible()):
        print(row["id"], row["client"], row["status_label"], row["total"])


if __name__ == "__main__":
    main()
