"""Kardex repository layer."""

from __future__ import annotations

from datetime import date

from podocare_client.core.enums import MovementTypeEnum
from podocare_client.modules.kardex.schemas import (
    KardexSummary,
    ProductMovement,
    ProductMovementCreate,
)
from podocare_client.shared.envelope import NESTED_SERVER_PAGES, NESTED_WITH_STATE
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, with_filters
from podocare_client.shared.utils import format_date


class KardexRepository(ApiRepository[ProductMovement, ProductMovementCreate, ProductMovementCreate]):
    """API operations for inventory movements."""

    endpoint = "/kardex"
    entity_schema = ProductMovement
    envelope = NESTED_SERVER_PAGES
    resource_label = "kardex movements"
    entity_label = "kardex movement"

    async def get_by_product(
        self,
        product_id: str,
        params: PaginatedSearchParams | None = None,
        *,
        movement_type: MovementTypeEnum | None = None,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> PaginatedResponse[ProductMovement]:
        return await self.get_all(
            with_filters(
                params,
                productId=product_id,
                type=movement_type,
                startDate=format_date(start_date) if start_date else None,
                endDate=format_date(end_date) if end_date else None,
            ),
        )

    async def get_summary(self) -> KardexSummary:
        """Inventory totals; this endpoint reports failures with ``state: "error"``."""
        return await self._get_entity(
            self._path("summary"),
            "Failed to fetch inventory summary",
            KardexSummary,
            envelope=NESTED_WITH_STATE,
        )
