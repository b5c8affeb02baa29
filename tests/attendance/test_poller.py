import threading

from barber_console.attendance.board import AttendanceBoard
from barber_console.attendance.model import AttendanceClient, AttendanceRecord
from barber_console.attendance.poller import AttendancePoller
from barber_console.core.enums import AttendanceStatus, PaymentStatus
from barber_console.core.exceptions import ApiUnavailableError, SessionExpiredError


def make_record(attendance_id):
    return AttendanceRecord(
        attendance_id=attendance_id,
        client=AttendanceClient(name="Cliente", phone=""),
        services=(),
        status=AttendanceStatus.WAITING,
        payment_status=PaymentStatus.PENDING,
    )


def test_refresh_now_applies_result():
    board = AttendanceBoard()
    refreshed = []
    poller = AttendancePoller(board, lambda: [make_record(1)], on_refresh=refreshed.append)

    assert poller.refresh_now() is True
    assert [r.attendance_id for r in board.records] == [1]
    assert refreshed == [board]


def test_failed_refresh_keeps_last_snapshot_and_reports():
    board = AttendanceBoard([make_record(7)])
    errors = []

    def fetch():
        raise ApiUnavailableError("API indisponível")

    poller = AttendancePoller(board, fetch, on_error=errors.append)

    assert poller.refresh_now() is False
    assert [r.attendance_id for r in board.records] == [7]
    assert len(errors) == 1


def test_background_loop_refreshes_until_stopped():
    board = AttendanceBoard()
    fetched = threading.Event()
    poller = AttendancePoller(board, lambda: [make_record(3)], interval=0.01, on_refresh=lambda b: fetched.set())

    poller.start()
    try:
        assert fetched.wait(2.0)
        assert poller.running
    finally:
        poller.stop(timeout=2.0)

    assert not poller.running
    assert [r.attendance_id for r in board.records] == [3]


def test_slow_fetch_from_older_tick_does_not_overwrite_newer():
    board = AttendanceBoard()
    release_slow = threading.Event()
    calls = []

    def fetch():
        calls.append(len(calls))
        if len(calls) == 1:
            release_slow.wait(2.0)
            return [make_record(1)]
        return [make_record(2)]

    poller = AttendancePoller(board, fetch)
    slow_seq = board.begin_refresh()
    slow = threading.Thread(target=poller._refresh, args=(slow_seq,))
    slow.start()
    while not calls:
        pass

    assert poller.refresh_now() is True
    release_slow.set()
    slow.join(2.0)

    assert [r.attendance_id for r in board.records] == [2]


def test_expired_session_stops_polling():
    board = AttendanceBoard()
    expired = []

    def fetch():
        raise SessionExpiredError("Sessão expirada. Faça login novamente.")

    poller = AttendancePoller(board, fetch, interval=0.01, on_expired=expired.append)
    poller.start()
    poller._thread.join(2.0)

    assert not poller.running
    assert expired
    poller.stop()
