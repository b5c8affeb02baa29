"""Terminal view of today's attendances, refreshed while it runs.

Logs in with ADMIN_USERNAME / ADMIN_PASSWORD and prints the board every
POLL_INTERVAL_SECONDS. Stop with Ctrl+C.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
import time

from dotenv import load_dotenv

from barber_console.attendance.board import AttendanceBoard, parse_sort_direction, parse_sort_field, parse_status_filter
from barber_console.attendance.poller import AttendancePoller
from barber_console.auth.session import SessionStore
from barber_console.common.display import format_currency, payment_label, status_label
from barber_console.container import build_container
from barber_console.core.exceptions import ApiError, AuthenticationError, FormValidationError
from barber_console.settings import get_settings_module

logger = logging.getLogger("watch_attendances")


def render(board: AttendanceBoard) -> None:
    stats = board.stats
    print(
        f"\nTotal {stats.total} | Aguardando {stats.waiting} | "
        f"Em andamento {stats.progress} | Finalizados {stats.finished}"
    )
    for r in board.visible():
        print(
            f"#{r.attendance_id:<5} {r.client.name:<25} {len(r.services)} serv. "
            f"{format_currency(r.total_price):>12}  {status_label(r.status.value):<13} {payment_label(r.payment_status.value)}"
        )


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    store = SessionStore({})
    container = build_container(api_config=settings.API_CONFIG, token_provider=lambda: store.admin_token)

    try:
        profile, token = container.admin_auth_service.login(
            os.getenv("ADMIN_USERNAME", ""), os.getenv("ADMIN_PASSWORD", "")
        )
    except (FormValidationError, AuthenticationError, ApiError) as e:
        logger.error("Login failed: %s", e)
        return 1
    store.login_admin(profile, token)

    board = AttendanceBoard(
        status_filter=parse_status_filter(os.getenv("STATUS_FILTER")),
        sort_field=parse_sort_field(os.getenv("SORT_FIELD")),
        sort_direction=parse_sort_direction(os.getenv("SORT_DIRECTION")),
    )
    poller = AttendancePoller(
        board,
        container.attendance_service.list_today,
        interval=getattr(settings, "POLL_INTERVAL_SECONDS", 5),
        on_refresh=render,
        on_error=lambda e: print(f"Erro ao carregar atendimentos: {e.user_message(str(e))}"),
        on_expired=lambda e: store.clear_on_unauthorized(),
    )

    poller.start()
    try:
        while poller.running:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop(timeout=2.0)

    if not store.is_admin():
        logger.error("Session expired, log in again")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
