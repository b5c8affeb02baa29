from decimal import Decimal

from barber_console.catalog.cart import ServiceSelection
from barber_console.catalog.model import Service

SERVICES = [
    Service(service_id=1, name="Corte", price=Decimal("35.00"), duration_minutes=30),
    Service(service_id=2, name="Barba", price=Decimal("25.00"), duration_minutes=20),
    Service(service_id=3, name="Sobrancelha", price=Decimal("15.00"), duration_minutes=10),
]


def test_toggle_adds_and_removes():
    selection = ServiceSelection()

    selection.toggle(3)
    selection.toggle(1)
    selection.toggle(3)

    assert selection.service_ids == [1]
    assert not selection.is_empty()


def test_totals_follow_catalog_order():
    selection = ServiceSelection([3, 1])

    assert [s.name for s in selection.chosen(SERVICES)] == ["Corte", "Sobrancelha"]
    assert selection.total_price(SERVICES) == Decimal("50.00")
    assert selection.total_minutes(SERVICES) == 40


def test_session_payload():
    data = ServiceSelection([1, 2]).to_session(SERVICES)

    assert data == {"service_ids": [1, 2], "totalPrice": "60.00", "totalMinutes": 50}
    assert ServiceSelection.from_session(data).service_ids == [1, 2]


def test_from_session_rejects_missing_or_bad_data():
    assert ServiceSelection.from_session(None) is None
    assert ServiceSelection.from_session({"service_ids": ["x"]}) is None
