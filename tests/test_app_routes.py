from dataclasses import replace
from decimal import Decimal

import pytest

from barber_console.admins.model import AdminProfile
from barber_console.attendance.model import AttendanceClient, AttendanceRecord, ServiceLine
from barber_console.catalog.model import Service
from barber_console.clients.model import Client
from barber_console.container import build_services
from barber_console.core.constants import ADMIN_SESSION_KEY, CLIENT_SESSION_KEY
from barber_console.core.enums import AttendanceStatus, PaymentStatus
from barber_console.core.exceptions import SessionExpiredError
from barber_console.main import create_app
from barber_console.reports.model import DashboardSummary, PeriodSummary, RevenuePoint

ANA = Client(client_id=1, name="Ana", cpf="11144477735", phone="11987654321")
ADMIN_ENTRY = {"id": 1, "name": "Matheus", "username": "matheus", "email": None, "token": "tok"}


def make_record(attendance_id, name, status=AttendanceStatus.WAITING):
    return AttendanceRecord(
        attendance_id=attendance_id,
        client=AttendanceClient(name=name, phone="11987654321", client_id=1),
        services=(ServiceLine(name="Corte", price=Decimal("35")),),
        status=status,
        payment_status=PaymentStatus.PENDING,
        payment_method="cash",
    )


class FakeAttendanceRepo:
    def __init__(self):
        self.records = [make_record(1, "Ana"), make_record(2, "Bruno", AttendanceStatus.PROGRESS)]
        self.created = []
        self.expired = False

    def list_today(self):
        if self.expired:
            raise SessionExpiredError("Sessão expirada. Faça login novamente.")
        return list(self.records)

    def list_for_client(self, client_id):
        return [r for r in self.records if r.client.client_id == client_id]

    def update_status(self, attendance_id, status):
        updated = replace(next(r for r in self.records if r.attendance_id == attendance_id), status=status)
        self.records = [updated if r.attendance_id == attendance_id else r for r in self.records]
        return updated

    def create(self, attendance):
        self.created.append(attendance)
        return make_record(3, "Ana")


class FakeClientRepo:
    def login(self, identifier):
        return ANA

    def register(self, draft):
        return replace(ANA, name=draft.name)

    def list_admin_view(self, status):
        return [ANA]

    def get_by_id(self, client_id):
        return ANA if client_id == 1 else None

    def create(self, draft):
        return ANA

    def update(self, client_id, draft):
        return ANA

    def delete_by_id(self, client_id):
        pass

    def reactivate(self, client_id):
        pass

    def auto_inactivate(self):
        return "Nenhum cliente inativado"


class FakeServiceRepo:
    def list_all(self):
        return [
            Service(service_id=1, name="Corte", price=Decimal("35"), duration_minutes=30),
            Service(service_id=2, name="Barba", price=Decimal("25"), duration_minutes=20),
        ]

    def create(self, draft):
        raise AssertionError("not used")

    def update(self, service_id, draft):
        raise AssertionError("not used")

    def deactivate(self, service_id):
        pass


class FakeAdminRepo:
    def login(self, username, password):
        if password != "secret":
            raise SessionExpiredError("401")
        return AdminProfile(admin_id=1, name="Matheus", username=username), "tok"


class FakeReportRepo:
    def get_summary(self):
        return DashboardSummary(
            total_clients=10,
            total_attendances=30,
            total_revenue=Decimal("900"),
            inactive_clients=2,
            today_attendances=3,
            pending_payments=1,
        )

    def get_recent_activities(self, *, limit):
        return []

    def get_period_summary(self, params):
        return PeriodSummary(
            total_revenue=Decimal("900"), total_clients=10, total_attendances=30, average_ticket=Decimal("30")
        )

    def get_top_clients(self):
        return []

    def get_revenue_chart(self, params):
        return [RevenuePoint(label="Jan", revenue=Decimal("300")), RevenuePoint(label="Fev", revenue=Decimal("600"))]

    def export(self, params):
        return b"PK-xlsx"


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def client(attendance_repo):
    container = build_services(
        attendance_repo=attendance_repo,
        clients_repo=FakeClientRepo(),
        services_repo=FakeServiceRepo(),
        admins_repo=FakeAdminRepo(),
        reports_repo=FakeReportRepo(),
    )
    app = create_app("barber_console.settings.testing", container=container)
    return app.test_client()


def login_admin(client):
    with client.session_transaction() as sess:
        sess[ADMIN_SESSION_KEY] = dict(ADMIN_ENTRY)


def test_home_and_mask_endpoint(client):
    assert client.get("/").status_code == 200

    resp = client.get("/api/mascara/cpf?value=11144477735")
    assert resp.get_json() == {"formatted": "111.444.777-35", "valid": True}
    assert client.get("/api/mascara/cep?value=1").status_code == 404


def test_admin_pages_require_login(client):
    resp = client.get("/admin/atendimentos")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/login")


def test_admin_login_flow(client):
    resp = client.post("/admin/login", data={"username": "matheus", "password": "wrong"})
    assert "Usuário ou senha inválidos" in resp.get_data(as_text=True)

    resp = client.post("/admin/login", data={"username": "matheus", "password": "secret"})
    assert resp.headers["Location"].endswith("/admin/dashboard")
    with client.session_transaction() as sess:
        assert sess[ADMIN_SESSION_KEY]["token"] == "tok"

    assert client.get("/admin/dashboard").status_code == 200


def test_attendance_page_and_json_refresh(client):
    login_admin(client)

    assert client.get("/admin/atendimentos?status=progress&sort=client&dir=asc").status_code == 200

    data = client.get("/admin/atendimentos/dados?status=waiting&seq=7").get_json()
    assert data["seq"] == 7
    assert data["stats"] == {"total": 2, "waiting": 1, "progress": 1, "finished": 0}
    assert [row["id"] for row in data["rows"]] == [1]


def test_advance_keeps_board_query(client, attendance_repo):
    login_admin(client)

    resp = client.post("/admin/atendimentos/1/avancar", data={"status": "all", "sort": "client", "dir": "asc"})

    assert resp.status_code == 302
    assert "sort=client" in resp.headers["Location"]
    assert attendance_repo.records[0].status == AttendanceStatus.PROGRESS


def test_expired_token_on_json_refresh(client, attendance_repo):
    login_admin(client)
    attendance_repo.expired = True

    resp = client.get("/admin/atendimentos/dados?seq=3")

    assert resp.status_code == 401
    assert resp.get_json()["redirect"].endswith("/admin/login")
    with client.session_transaction() as sess:
        assert ADMIN_SESSION_KEY not in sess


def test_expired_token_on_page_redirects_to_login(client, attendance_repo):
    login_admin(client)
    attendance_repo.expired = True

    resp = client.get("/admin/atendimentos")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/login")


def test_csv_and_report_exports(client):
    login_admin(client)

    csv_resp = client.get("/admin/atendimentos/exportar.csv")
    assert csv_resp.mimetype == "text/csv"
    assert "Bruno" in csv_resp.get_data().decode("utf-8-sig")

    assert client.get("/admin/relatorios?period=week").status_code == 200
    xlsx = client.get("/admin/relatorios/exportar?period=week")
    assert xlsx.data == b"PK-xlsx"
    assert "relatorio-" in xlsx.headers["Content-Disposition"]


def test_client_login_and_booking_flow(client, attendance_repo):
    resp = client.post("/cliente/login", data={"identifier": "111.444.777-35"})
    assert resp.headers["Location"].endswith("/cliente/dashboard")
    assert client.get("/cliente/dashboard").status_code == 200

    resp = client.post("/cliente/atendimento/iniciar", data={"continue": "1"})
    assert "Selecione pelo menos um serviço" in resp.get_data(as_text=True)

    client.post("/cliente/atendimento/iniciar", data={"toggle": "2"})
    resp = client.post("/cliente/atendimento/iniciar", data={"continue": "1"})
    assert resp.headers["Location"].endswith("/cliente/atendimento/resumo")
    assert "Barba" in client.get("/cliente/atendimento/resumo").get_data(as_text=True)

    resp = client.post("/cliente/atendimento/pagamento", data={"payment_method": "pix"})
    assert resp.headers["Location"].endswith("/")
    assert attendance_repo.created[0].service_ids == [2]
    with client.session_transaction() as sess:
        assert CLIENT_SESSION_KEY not in sess


def test_client_register_shows_field_errors(client):
    resp = client.post("/cliente/cadastro", data={"name": "", "cpf": "123", "phone": "", "email": ""})

    text = resp.get_data(as_text=True)
    assert "Nome é obrigatório" in text
    assert "CPF inválido" in text


def test_admin_client_management(client):
    login_admin(client)

    assert "Ana" in client.get("/admin/clientes?status=active&q=ana").get_data(as_text=True)
    assert client.get("/admin/clientes/1/editar").status_code == 200
    assert client.get("/admin/clientes/404/editar").status_code == 302
    assert client.post("/admin/clientes/inativar-automatico").status_code == 302
    assert client.get("/admin/servicos?q=corte").status_code == 200
