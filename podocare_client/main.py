"""Client entrypoint: logging setup and repository wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import httpx

from podocare_client.core.config import Settings, get_settings
from podocare_client.core.http import AuthenticatedClient
from podocare_client.modules.abonos.repository import AbonoRepository
from podocare_client.modules.appointments.repository import AppointmentRepository
from podocare_client.modules.kardex.repository import KardexRepository
from podocare_client.modules.packages.repository import (
    PackageRepository,
    PatientPackageRepository,
)
from podocare_client.modules.patients.repository import PatientRepository
from podocare_client.modules.products.repository import (
    ProductCategoryRepository,
    ProductRepository,
)
from podocare_client.modules.sales.repository import SaleRepository
from podocare_client.modules.workers.repository import WorkerRepository
from podocare_client.shared.pagination import DEFAULT_PAGE_SIZE, PaginationController

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Repositories:
    """Every resource repository, sharing one authenticated client."""

    patients: PatientRepository
    workers: WorkerRepository
    appointments: AppointmentRepository
    products: ProductRepository
    product_categories: ProductCategoryRepository
    kardex: KardexRepository
    sales: SaleRepository
    abonos: AbonoRepository
    packages: PackageRepository
    patient_packages: PatientPackageRepository
    default_page_size: int = DEFAULT_PAGE_SIZE

    def paginator(self, **kwargs: Any) -> PaginationController[Any]:
        """New list-page controller using the configured page size."""
        kwargs.setdefault("initial_page_size", self.default_page_size)
        return PaginationController(**kwargs)


def build_repositories(
    client: AuthenticatedClient,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> Repositories:
    return Repositories(
        patients=PatientRepository(client),
        workers=WorkerRepository(client),
        appointments=AppointmentRepository(client),
        products=ProductRepository(client),
        product_categories=ProductCategoryRepository(client),
        kardex=KardexRepository(client),
        sales=SaleRepository(client),
        abonos=AbonoRepository(client),
        packages=PackageRepository(client),
        patient_packages=PatientPackageRepository(client),
        default_page_size=default_page_size,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def open_repositories(
    settings: Settings | None = None,
    *,
    on_token_expired: Callable[[], None] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[Repositories]:
    """Open an API session and yield the repositories bound to it."""
    settings = settings or get_settings()
    configure_logging(settings)
    logger.info("Opening %s API session against %s", settings.app_name, settings.api_base_url)

    client = AuthenticatedClient.from_settings(
        settings,
        on_token_expired=on_token_expired,
        transport=transport,
    )
    try:
        yield build_repositories(client, default_page_size=settings.default_page_size)
    finally:
        await client.aclose()
        logger.info("Closed %s API session", settings.app_name)
