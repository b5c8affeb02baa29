from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admins.http_admin_repository import HttpAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AdminAuthService
from .api.client import ApiClient, ApiConfig, TokenProvider
from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .catalog.http_service_repository import HttpServiceRepository
from .catalog.repository import ServiceRepository
from .catalog.service import CatalogService
from .clients.http_client_repository import HttpClientRepository
from .clients.repository import ClientRepository
from .clients.service import ClientAuthService, ClientService
from .reports.http_report_repository import HttpReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    clients_repo: ClientRepository
    services_repo: ServiceRepository
    admins_repo: AdminRepository
    reports_repo: ReportRepository

    attendance_service: AttendanceService
    client_auth_service: ClientAuthService
    client_service: ClientService
    catalog_service: CatalogService
    admin_auth_service: AdminAuthService
    report_service: ReportService


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    clients_repo: ClientRepository,
    services_repo: ServiceRepository,
    admins_repo: AdminRepository,
    reports_repo: ReportRepository,
) -> Container:
    return Container(
        attendance_repo=attendance_repo,
        clients_repo=clients_repo,
        services_repo=services_repo,
        admins_repo=admins_repo,
        reports_repo=reports_repo,
        attendance_service=AttendanceService(attendance_repo),
        client_auth_service=ClientAuthService(clients_repo),
        client_service=ClientService(clients_repo),
        catalog_service=CatalogService(services_repo),
        admin_auth_service=AdminAuthService(admins_repo),
        report_service=ReportService(reports_repo),
    )


def build_container(*, api_config: dict, token_provider: Optional[TokenProvider] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout", 10)),
    )
    api = ApiClient(config, token_provider=token_provider)

    return build_services(
        attendance_repo=HttpAttendanceRepository(api),
        clients_repo=HttpClientRepository(api),
        services_repo=HttpServiceRepository(api),
        admins_repo=HttpAdminRepository(api),
        reports_repo=HttpReportRepository(api),
    )
