"""Abonos repository layer."""

from __future__ import annotations

from podocare_client.modules.abonos.schemas import (
    Abono,
    AbonoBalance,
    AbonoCreate,
    AbonoUpdate,
    AbonoUsage,
    AbonoUse,
)
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, dump_payload, with_filters


class AbonoRepository(ApiRepository[Abono, AbonoCreate, AbonoUpdate]):
    """API operations for patient prepayments."""

    endpoint = "/abonos"
    entity_schema = Abono
    resource_label = "abonos"
    entity_label = "abono"

    async def get_by_patient(
        self,
        patient_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Abono]:
        return await self.get_all(with_filters(params, patientId=patient_id))

    async def get_active_by_patient(
        self,
        patient_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Abono]:
        return await self.get_all(with_filters(params, patientId=patient_id, active=True))

    async def use_abono(self, abono_id: str, payload: AbonoUse) -> AbonoUsage:
        """Consume part of an abono; returns the usage record."""
        return await self._send_entity(
            "POST",
            self._path(abono_id, "use"),
            dump_payload(payload, partial=True),
            "Failed to use abono",
            AbonoUsage,
        )

    async def get_patient_balance(self, patient_id: str) -> float:
        balance = await self._get_entity(
            self._path("patient", patient_id, "balance"),
            "Failed to fetch abono balance",
            AbonoBalance,
        )
        return balance.balance

    async def get_usage_history(self, abono_id: str) -> list[AbonoUsage]:
        return await self._get_collection(
            self._path(abono_id, "usage"),
            "Failed to fetch abono usage",
            AbonoUsage,
        )
