"""Sales repository layer."""

from __future__ import annotations

from datetime import date

from podocare_client.core.enums import PaymentMethodEnum
from podocare_client.modules.sales.schemas import Sale, SaleCreate, SaleStats
from podocare_client.shared.envelope import NESTED
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, with_filters
from podocare_client.shared.utils import format_date


class SaleRepository(ApiRepository[Sale, SaleCreate, SaleCreate]):
    """API operations for point-of-sale sales."""

    endpoint = "/sale"
    entity_schema = Sale
    envelope = NESTED
    resource_label = "sales"
    entity_label = "sale"

    async def get_by_date_range(
        self,
        start_date: date | str,
        end_date: date | str,
        params: PaginatedSearchParams | None = None,
        *,
        payment_method: PaymentMethodEnum | None = None,
    ) -> PaginatedResponse[Sale]:
        return await self.get_all(
            with_filters(
                params,
                startDate=format_date(start_date),
                endDate=format_date(end_date),
                paymentMethod=payment_method,
            ),
        )

    async def get_stats(self) -> SaleStats:
        return await self._get_entity(self._path("stats"), "Failed to fetch sales stats", SaleStats)
