"""Patients repository layer."""

from __future__ import annotations

from podocare_client.modules.patients.schemas import (
    Patient,
    PatientBalanceUpdate,
    PatientCreate,
    PatientDetailStatistics,
    PatientUpdate,
)
from podocare_client.shared.repository import ApiRepository, dump_payload


class PatientRepository(ApiRepository[Patient, PatientCreate, PatientUpdate]):
    """API operations for patients.

    The list endpoint nests its page one level below the ``state``/``message``
    envelope and does not report ``totalPages``; it is computed from
    ``total`` and ``limit``.
    """

    endpoint = "/patient"
    entity_schema = Patient
    resource_label = "patients"
    entity_label = "patient"

    async def get_detail_statistics(self, patient_id: str) -> PatientDetailStatistics:
        return await self._get_entity(
            self._path(patient_id, "statistics"),
            "Failed to fetch patient details",
            PatientDetailStatistics,
        )

    async def update_balance(self, patient_id: str, payload: PatientBalanceUpdate) -> Patient:
        """Register a balance movement; returns the patient with the new balance."""
        return await self._send_entity(
            "POST",
            self._path(patient_id, "balance"),
            dump_payload(payload),
            "Failed to update patient balance",
        )
