from __future__ import annotations

import json
from datetime import date

import httpx
import pytest

from podocare_client.core.enums import (
    AppointmentStatusEnum,
    MovementTypeEnum,
    PaymentMethodEnum,
    ProductStatusEnum,
)
from podocare_client.core.http import AuthenticatedClient
from podocare_client.modules.abonos.repository import AbonoRepository
from podocare_client.modules.abonos.schemas import AbonoUse
from podocare_client.modules.appointments.repository import AppointmentRepository
from podocare_client.modules.kardex.repository import KardexRepository
from podocare_client.modules.packages.repository import (
    PackageRepository,
    PatientPackageRepository,
)
from podocare_client.modules.packages.schemas import PackageSessionUse
from podocare_client.modules.products.repository import (
    ProductCategoryRepository,
    ProductRepository,
)
from podocare_client.modules.products.schemas import ProductCategoryCreate
from podocare_client.modules.sales.repository import SaleRepository
from podocare_client.modules.sales.schemas import SaleCreate, SaleItemCreate
from podocare_client.modules.workers.repository import WorkerRepository
from podocare_client.shared.exceptions import RepositoryError
from podocare_client.shared.pagination import PaginatedSearchParams

PRODUCT = {
    "id": "prod-1",
    "name": "Crema podológica",
    "price": 35.5,
    "stock": 4,
    "categoryId": "cat-1",
    "status": "active",
    "category": {"id": "cat-1", "name": "Cremas", "slug": "cremas"},
}


class _Recorder:
    """Mock transport handler returning one canned response and keeping requests."""

    def __init__(self, status_code: int = 200, body: dict | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _client(recorder: _Recorder) -> AuthenticatedClient:
    return AuthenticatedClient("http://clinic.test/api", transport=httpx.MockTransport(recorder))


@pytest.mark.asyncio
async def test_products_use_server_total_pages() -> None:
    recorder = _Recorder(
        body={"data": {"data": [PRODUCT], "total": 20, "page": 1, "limit": 10, "totalPages": 9}},
    )
    async with _client(recorder) as client:
        page = await ProductRepository(client).get_all(PaginatedSearchParams(page=1, limit=10))

    assert recorder.last.url.path == "/api/product"
    assert page.total_pages == 9
    product = page.items[0]
    assert product.status == ProductStatusEnum.ACTIVE
    assert product.category is not None
    assert product.category.slug == "cremas"


@pytest.mark.asyncio
async def test_products_by_category_sends_category_filter() -> None:
    recorder = _Recorder(body={"data": {"data": [], "total": 0, "page": 1, "limit": 15}})
    async with _client(recorder) as client:
        page = await ProductRepository(client).get_by_category(
            "cat-1",
            PaginatedSearchParams(page=1, limit=15, search="crema"),
        )

    params = recorder.last.url.params
    assert params["categoryId"] == "cat-1"
    assert params["search"] == "crema"
    assert page.total_pages == 0


@pytest.mark.asyncio
async def test_product_categories_compute_total_pages() -> None:
    recorder = _Recorder(
        body={
            "data": {
                "data": [{"id": "cat-1", "name": "Cremas"}],
                "total": 16,
                "page": 1,
                "limit": 15,
            },
        },
    )
    async with _client(recorder) as client:
        page = await ProductCategoryRepository(client).get_all()

    assert recorder.last.url.path == "/api/product-category"
    assert page.total_pages == 2
    assert page.items[0].name == "Cremas"


@pytest.mark.asyncio
async def test_product_category_create_reports_failure() -> None:
    recorder = _Recorder(status_code=400, body={"message": "La categoría ya existe"})
    async with _client(recorder) as client:
        with pytest.raises(RepositoryError, match="La categoría ya existe"):
            await ProductCategoryRepository(client).create(ProductCategoryCreate(name="Cremas"))

    assert json.loads(recorder.last.content) == {"name": "Cremas"}


@pytest.mark.asyncio
async def test_kardex_by_product_sends_movement_filters() -> None:
    recorder = _Recorder(
        body={
            "data": {
                "data": [
                    {
                        "id": "k-1",
                        "productId": "prod-1",
                        "type": "entrada",
                        "quantity": 10,
                        "costUnit": 12,
                        "totalCost": 120,
                        "stockAfter": 14,
                    },
                ],
                "total": 1,
                "page": 1,
                "limit": 15,
                "totalPages": 1,
            },
        },
    )
    async with _client(recorder) as client:
        page = await KardexRepository(client).get_by_product(
            "prod-1",
            PaginatedSearchParams(page=1, limit=15),
            movement_type=MovementTypeEnum.ENTRADA,
            start_date=date(2025, 3, 1),
        )

    params = recorder.last.url.params
    assert params["productId"] == "prod-1"
    assert params["type"] == "entrada"
    assert params["startDate"] == "2025-03-01"
    assert "endDate" not in params
    movement = page.items[0]
    assert movement.type == MovementTypeEnum.ENTRADA
    assert movement.stock_after == 14


@pytest.mark.asyncio
async def test_kardex_summary_reads_state_envelope() -> None:
    recorder = _Recorder(
        body={
            "state": "success",
            "message": "Resumen obtenido",
            "data": {
                "totalEntries": 120,
                "totalExits": 80,
                "totalInventoryValue": 1530.75,
                "lowStock": [PRODUCT],
            },
        },
    )
    async with _client(recorder) as client:
        summary = await KardexRepository(client).get_summary()

    assert recorder.last.url.path == "/api/kardex/summary"
    assert summary.total_entries == 120
    assert summary.total_inventory_value == 1530.75
    assert summary.low_stock[0].id == "prod-1"


@pytest.mark.asyncio
async def test_kardex_summary_error_state_raises() -> None:
    recorder = _Recorder(body={"state": "error", "message": "Error al obtener resumen"})
    async with _client(recorder) as client:
        with pytest.raises(RepositoryError, match="Error al obtener resumen"):
            await KardexRepository(client).get_summary()


@pytest.mark.asyncio
async def test_appointments_by_date_range_and_patient() -> None:
    recorder = _Recorder(
        body={
            "state": "success",
            "data": {
                "data": [{"id": 7, "patientId": "p-1", "status": "scheduled"}],
                "total": 1,
                "page": 1,
                "limit": 15,
            },
        },
    )
    async with _client(recorder) as client:
        repository = AppointmentRepository(client)
        page = await repository.get_by_date_range("2025-03-01", date(2025, 3, 31))
        await repository.get_by_patient("p-1", PaginatedSearchParams(page=2, limit=5))

    first, second = recorder.requests
    assert first.url.params["startDate"] == "2025-03-01"
    assert first.url.params["endDate"] == "2025-03-31"
    assert second.url.params["patientId"] == "p-1"
    assert second.url.params["page"] == "2"
    assert page.items[0].id == "7"
    assert page.items[0].status == AppointmentStatusEnum.SCHEDULED


@pytest.mark.asyncio
async def test_appointment_status_update_uses_patch() -> None:
    recorder = _Recorder(body={"state": "success", "data": {"id": "a-1", "status": "paid"}})
    async with _client(recorder) as client:
        appointment = await AppointmentRepository(client).update_status(
            "a-1",
            AppointmentStatusEnum.PAID,
        )

    assert recorder.last.method == "PATCH"
    assert recorder.last.url.path == "/api/appointment/a-1"
    assert json.loads(recorder.last.content) == {"status": "paid"}
    assert appointment.status == AppointmentStatusEnum.PAID


@pytest.mark.asyncio
async def test_sales_by_date_range_sends_payment_method() -> None:
    recorder = _Recorder(body={"data": {"data": [], "total": 0, "page": 1, "limit": 15}})
    async with _client(recorder) as client:
        await SaleRepository(client).get_by_date_range(
            date(2025, 1, 1),
            date(2025, 1, 31),
            payment_method=PaymentMethodEnum.CASH,
        )

    params = recorder.last.url.params
    assert params["startDate"] == "2025-01-01"
    assert params["endDate"] == "2025-01-31"
    assert params["paymentMethod"] == "cash"


@pytest.mark.asyncio
async def test_sale_create_and_stats() -> None:
    recorder = _Recorder(
        status_code=201,
        body={
            "data": {
                "id": "s-1",
                "totalAmount": 71,
                "paymentMethod": "pos",
                "state": "activa",
                "saleItems": [{"productId": "prod-1", "quantity": 2, "price": 35.5}],
            },
        },
    )
    async with _client(recorder) as client:
        repository = SaleRepository(client)
        sale = await repository.create(
            SaleCreate(
                customer_id="p-1",
                sale_items=[SaleItemCreate(product_id="prod-1", quantity=2, price=35.5)],
                payment_method=PaymentMethodEnum.POS,
            ),
        )
        sent = json.loads(recorder.last.content)

        recorder.status_code = 200
        recorder.body = {
            "data": {"today": 3, "todayAmount": 150, "thisMonth": 40, "thisMonthAmount": 2100.5},
        }
        stats = await repository.get_stats()

    assert sent["customerId"] == "p-1"
    assert sent["paymentMethod"] == "pos"
    assert sent["saleItems"] == [{"productId": "prod-1", "quantity": 2, "price": 35.5}]
    assert sale.total_amount == 71
    assert sale.sale_items[0].quantity == 2
    assert recorder.last.url.path == "/api/sale/stats"
    assert stats.this_month == 40
    assert stats.this_month_amount == 2100.5


@pytest.mark.asyncio
async def test_active_workers_filter_and_status_toggle() -> None:
    worker = {"id": "w-1", "firstName": "Luis", "lastName": "Paredes", "isActive": False}
    recorder = _Recorder(
        body={
            "state": "success",
            "data": {"data": [worker], "total": 1, "page": 1, "limit": 15},
        },
    )
    async with _client(recorder) as client:
        repository = WorkerRepository(client)
        page = await repository.get_active_workers()
        list_request = recorder.last

        recorder.body = {"state": "success", "data": {**worker, "isActive": True}}
        updated = await repository.update_active_status("w-1", True)

    assert list_request.url.path == "/api/user"
    assert list_request.url.params["active"] == "true"
    assert page.items[0].active is False
    assert page.items[0].full_name == "Luis Paredes"
    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == "/api/user/w-1"
    assert json.loads(recorder.last.content) == {"active": True}
    assert updated.active is True


@pytest.mark.asyncio
async def test_abonos_by_patient_and_active_filter() -> None:
    abono = {
        "id": "ab-1",
        "patientId": "p-1",
        "amount": 200,
        "method": "yape",
        "usedAmount": 50,
        "remainingAmount": 150,
        "isActive": True,
    }
    recorder = _Recorder(
        body={"state": "success", "data": {"data": [abono], "total": 1, "page": 1, "limit": 15}},
    )
    async with _client(recorder) as client:
        repository = AbonoRepository(client)
        page = await repository.get_by_patient("p-1")
        by_patient = recorder.last
        await repository.get_active_by_patient("p-1", PaginatedSearchParams(page=1, limit=5))

    assert by_patient.url.path == "/api/abonos"
    assert by_patient.url.params["patientId"] == "p-1"
    assert "active" not in by_patient.url.params
    assert recorder.last.url.params["active"] == "true"
    assert recorder.last.url.params["limit"] == "5"
    assert page.items[0].method == PaymentMethodEnum.YAPE
    assert page.items[0].remaining_amount == 150


@pytest.mark.asyncio
async def test_use_abono_posts_usage() -> None:
    recorder = _Recorder(
        body={
            "state": "success",
            "data": {"id": "u-1", "abonoId": "ab-1", "appointmentId": "a-1", "amount": 80},
        },
    )
    async with _client(recorder) as client:
        usage = await AbonoRepository(client).use_abono(
            "ab-1",
            AbonoUse(amount=80, appointment_id="a-1"),
        )

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == "/api/abonos/ab-1/use"
    assert json.loads(recorder.last.content) == {"amount": 80.0, "appointmentId": "a-1"}
    assert usage.abono_id == "ab-1"
    assert usage.amount == 80


@pytest.mark.asyncio
async def test_abono_balance_and_usage_history() -> None:
    recorder = _Recorder(body={"state": "success", "data": {"balance": 120.5}})
    async with _client(recorder) as client:
        repository = AbonoRepository(client)
        balance = await repository.get_patient_balance("p-1")
        balance_path = recorder.last.url.path

        recorder.body = {
            "state": "success",
            "data": [
                {"id": "u-1", "abonoId": "ab-1", "amount": 30},
                {"id": "u-2", "abonoId": "ab-1", "saleId": "s-4", "amount": 20},
            ],
        }
        history = await repository.get_usage_history("ab-1")

    assert balance_path == "/api/abonos/patient/p-1/balance"
    assert balance == 120.5
    assert recorder.last.url.path == "/api/abonos/ab-1/usage"
    assert [usage.id for usage in history] == ["u-1", "u-2"]
    assert history[1].sale_id == "s-4"


@pytest.mark.asyncio
async def test_usage_history_requires_list_payload() -> None:
    recorder = _Recorder(body={"state": "success", "data": {"id": "u-1"}})
    async with _client(recorder) as client:
        with pytest.raises(RepositoryError, match="Failed to fetch abono usage"):
            await AbonoRepository(client).get_usage_history("ab-1")


@pytest.mark.asyncio
async def test_active_packages_filter() -> None:
    recorder = _Recorder(
        body={
            "state": "success",
            "data": {
                "data": [{"id": "pk-1", "name": "Pack 5 sesiones", "price": 250, "sessions": 5}],
                "total": 16,
                "page": 1,
                "limit": 15,
            },
        },
    )
    async with _client(recorder) as client:
        page = await PackageRepository(client).get_active_packages()

    assert recorder.last.url.path == "/api/packages"
    assert recorder.last.url.params["active"] == "true"
    assert page.total_pages == 2
    assert page.items[0].sessions == 5


@pytest.mark.asyncio
async def test_patient_packages_by_patient_and_sessions() -> None:
    recorder = _Recorder(
        body={
            "state": "success",
            "data": {
                "data": [
                    {
                        "id": "pp-1",
                        "patientId": "p-1",
                        "packageId": "pk-1",
                        "remainingSessions": 3,
                        "package": {"id": "pk-1", "name": "Pack 5 sesiones"},
                    },
                ],
                "total": 1,
                "page": 1,
                "limit": 15,
            },
        },
    )
    async with _client(recorder) as client:
        repository = PatientPackageRepository(client)
        page = await repository.get_active_by_patient("p-1")
        list_request = recorder.last

        recorder.body = {
            "state": "success",
            "data": {"id": "ps-1", "patientPackageId": "pp-1", "appointmentId": "a-9"},
        }
        session = await repository.use_session("pp-1", PackageSessionUse(appointment_id="a-9"))
        use_request = recorder.last

        recorder.body = {"state": "success", "data": [{"id": "ps-1", "appointmentId": "a-9"}]}
        history = await repository.get_session_history("pp-1")

    assert list_request.url.path == "/api/patient-packages"
    assert list_request.url.params["patientId"] == "p-1"
    assert list_request.url.params["active"] == "true"
    assert page.items[0].remaining_sessions == 3
    assert page.items[0].package is not None
    assert page.items[0].package.name == "Pack 5 sesiones"
    assert use_request.url.path == "/api/patient-packages/pp-1/use-session"
    assert json.loads(use_request.content) == {"appointmentId": "a-9"}
    assert session.patient_package_id == "pp-1"
    assert recorder.last.url.path == "/api/patient-packages/pp-1/sessions"
    assert history[0].appointment_id == "a-9"
