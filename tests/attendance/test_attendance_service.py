from dataclasses import replace
from decimal import Decimal

import pytest

from barber_console.attendance.board import AttendanceBoard
from barber_console.attendance.model import AttendanceClient, AttendanceRecord, ServiceLine
from barber_console.attendance.service import AttendanceService
from barber_console.catalog.cart import ServiceSelection
from barber_console.core.enums import AttendanceStatus, PaymentStatus, SortDirection, SortField, StatusFilter
from barber_console.core.exceptions import ApiError, ValidationError


def make_record(attendance_id, status=AttendanceStatus.WAITING):
    return AttendanceRecord(
        attendance_id=attendance_id,
        client=AttendanceClient(name=f"Cliente {attendance_id}", phone="11987654321", client_id=10),
        services=(ServiceLine(name="Corte", price=Decimal("35")), ServiceLine(name="Barba", price=Decimal("25.5"))),
        status=status,
        payment_status=PaymentStatus.PENDING,
        payment_method="pix",
    )


class FakeAttendanceRepo:
    def __init__(self, records=(), *, fail_update=False):
        self._records = list(records)
        self.fail_update = fail_update
        self.updates = []
        self.created = []

    def list_today(self):
        return list(self._records)

    def list_for_client(self, client_id):
        return [r for r in self._records if r.client.client_id == client_id]

    def update_status(self, attendance_id, status):
        self.updates.append((attendance_id, status))
        if self.fail_update:
            raise ApiError("API respondeu 500", status_code=500)
        current = next(r for r in self._records if r.attendance_id == attendance_id)
        # The server may return more than the status change.
        return replace(current, status=status, payment_status=PaymentStatus.PAID)

    def create(self, attendance):
        self.created.append(attendance)
        return make_record(99)


def test_advance_replaces_record_with_server_answer():
    repo = FakeAttendanceRepo([make_record(1), make_record(2)])
    svc = AttendanceService(repo)
    board = svc.load_board()

    updated = svc.advance(board.find(1), board=board)

    assert repo.updates == [(1, AttendanceStatus.PROGRESS)]
    assert updated.status == AttendanceStatus.PROGRESS
    assert board.find(1).payment_status == PaymentStatus.PAID
    assert board.find(2).status == AttendanceStatus.WAITING


def test_advance_failure_leaves_board_untouched():
    repo = FakeAttendanceRepo([make_record(1)], fail_update=True)
    svc = AttendanceService(repo)
    board = svc.load_board()

    with pytest.raises(ApiError):
        svc.advance(board.find(1), board=board)

    assert board.find(1).status == AttendanceStatus.WAITING


def test_advance_finished_record_sends_nothing():
    repo = FakeAttendanceRepo([make_record(1, AttendanceStatus.FINISHED)])
    svc = AttendanceService(repo)

    with pytest.raises(ValidationError, match="já finalizado"):
        svc.advance(repo.list_today()[0])

    assert repo.updates == []


def test_load_board_applies_view_settings():
    repo = FakeAttendanceRepo([make_record(1), make_record(2, AttendanceStatus.PROGRESS), make_record(3)])
    svc = AttendanceService(repo)

    board = svc.load_board(
        status_filter=StatusFilter.WAITING, sort_field=SortField.ID, sort_direction=SortDirection.ASC
    )

    assert [r.attendance_id for r in board.visible()] == [1, 3]
    assert board.stats.total == 3


def test_book_requires_services_and_payment_method():
    svc = AttendanceService(FakeAttendanceRepo())

    with pytest.raises(ValidationError, match="pelo menos um serviço"):
        svc.book(client_id=10, selection=ServiceSelection(), payment_method="pix")
    with pytest.raises(ValidationError, match="forma de pagamento"):
        svc.book(client_id=10, selection=ServiceSelection([1]), payment_method="cheque")


def test_book_posts_selection():
    repo = FakeAttendanceRepo()
    svc = AttendanceService(repo)

    svc.book(client_id=10, selection=ServiceSelection([3, 1]), payment_method="card", notes="  ")

    sent = repo.created[0]
    assert sent.client_id == 10
    assert sent.service_ids == [3, 1]
    assert sent.payment_method == "card"
    assert sent.notes is None
    assert sent.appointment_date.endswith("-03:00")


def test_rows_for_json_and_csv():
    rows = AttendanceService.to_rows([make_record(1), make_record(2, AttendanceStatus.FINISHED)])

    assert rows[0]["total"] == "60.50"
    assert rows[0]["services"] == "Corte - R$ 35.00, Barba - R$ 25.50"
    assert rows[0]["status_label"] == "Aguardando"
    assert rows[0]["payment_method"] == "PIX"
    assert rows[0]["can_advance"] is True
    assert rows[1]["can_advance"] is False
