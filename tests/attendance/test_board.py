from decimal import Decimal

from barber_console.attendance.board import (
    AttendanceBoard,
    BoardStats,
    compute_stats,
    filter_by_status,
    next_status,
    parse_sort_direction,
    parse_status_filter,
    sort_records,
    toggle_sort,
)
from barber_console.attendance.model import AttendanceClient, AttendanceRecord, ServiceLine
from barber_console.core.enums import AttendanceStatus, PaymentStatus, SortDirection, SortField, StatusFilter


def make_record(attendance_id, name, status, *, services=1, payment=PaymentStatus.PENDING):
    return AttendanceRecord(
        attendance_id=attendance_id,
        client=AttendanceClient(name=name, phone="11987654321"),
        services=tuple(ServiceLine(name=f"S{i}", price=Decimal("30")) for i in range(services)),
        status=status,
        payment_status=payment,
    )


W, P, F = AttendanceStatus.WAITING, AttendanceStatus.PROGRESS, AttendanceStatus.FINISHED


def test_stats_count_every_status():
    records = [make_record(1, "a", W), make_record(2, "b", W), make_record(3, "c", P), make_record(4, "d", F)]

    assert compute_stats(records) == BoardStats(total=4, waiting=2, progress=1, finished=1)
    assert compute_stats([]) == BoardStats()


def test_filter_all_is_identity():
    records = [make_record(1, "a", W), make_record(2, "b", F)]

    assert filter_by_status(records, StatusFilter.ALL) == records
    assert [r.attendance_id for r in filter_by_status(records, StatusFilter.FINISHED)] == [2]


def test_sort_is_stable_in_both_directions():
    records = [
        make_record(1, "Ana", W, services=2),
        make_record(2, "Bia", W, services=1),
        make_record(3, "Caio", W, services=2),
    ]

    asc = sort_records(records, SortField.SERVICES, SortDirection.ASC)
    desc = sort_records(records, SortField.SERVICES, SortDirection.DESC)

    assert [r.attendance_id for r in asc] == [2, 1, 3]
    assert [r.attendance_id for r in desc] == [1, 3, 2]


def test_sort_does_not_mutate_input():
    records = [make_record(2, "b", W), make_record(1, "a", W)]

    sort_records(records, SortField.ID, SortDirection.ASC)

    assert [r.attendance_id for r in records] == [2, 1]


def test_sort_by_payment_uses_payment_status():
    records = [
        make_record(1, "a", W, payment=PaymentStatus.PENDING),
        make_record(2, "b", W, payment=PaymentStatus.CANCELLED),
        make_record(3, "c", W, payment=PaymentStatus.PAID),
    ]

    result = sort_records(records, SortField.PAYMENT, SortDirection.ASC)

    assert [r.attendance_id for r in result] == [2, 3, 1]


def test_toggle_sort():
    assert toggle_sort(SortField.ID, SortDirection.DESC, SortField.ID) == (SortField.ID, SortDirection.ASC)
    assert toggle_sort(SortField.ID, SortDirection.ASC, SortField.ID) == (SortField.ID, SortDirection.DESC)
    assert toggle_sort(SortField.ID, SortDirection.ASC, SortField.CLIENT) == (SortField.CLIENT, SortDirection.ASC)


def test_next_status_is_forward_only():
    assert next_status(W) == P
    assert next_status(P) == F
    assert next_status(F) == F


def test_unknown_query_values_fall_back_to_defaults():
    assert parse_status_filter("bogus") == StatusFilter.ALL
    assert parse_status_filter(None) == StatusFilter.ALL
    assert parse_sort_direction("sideways") == SortDirection.DESC


def test_progress_filter_sorted_by_client_keeps_stats_over_all_records():
    board = AttendanceBoard(
        [
            make_record(1, "zeca", P),
            make_record(2, "Ana", W),
            make_record(3, "bruno", P),
            make_record(4, "Carla", F),
            make_record(5, "Alice", P),
        ]
    )
    board.set_filter(StatusFilter.PROGRESS)
    board.sort_by(SortField.CLIENT)

    visible = board.visible()

    assert [r.client.name for r in visible] == ["Alice", "bruno", "zeca"]
    assert board.stats == BoardStats(total=5, waiting=1, progress=3, finished=1)


def test_replace_swaps_record_by_id():
    board = AttendanceBoard([make_record(1, "a", W), make_record(2, "b", W)])

    board.replace(make_record(2, "b", P))

    assert board.find(2).status == P
    assert board.find(1).status == W


def test_stale_refresh_is_discarded():
    board = AttendanceBoard()
    older = board.begin_refresh()
    newer = board.begin_refresh()

    assert board.apply_refresh(newer, [make_record(2, "new", W)]) is True
    assert board.apply_refresh(older, [make_record(1, "old", W)]) is False
    assert [r.attendance_id for r in board.records] == [2]
    assert board.applied_seq == newer


def test_older_refresh_is_discarded_even_if_it_lands_first():
    board = AttendanceBoard([make_record(9, "current", W)])
    older = board.begin_refresh()
    board.begin_refresh()

    assert board.apply_refresh(older, []) is False
    assert [r.attendance_id for r in board.records] == [9]
