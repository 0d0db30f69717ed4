"""Appointments repository layer."""

from __future__ import annotations

from datetime import date

from podocare_client.core.enums import AppointmentStatusEnum
from podocare_client.modules.appointments.schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
)
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, with_filters
from podocare_client.shared.utils import format_date


class AppointmentRepository(ApiRepository[Appointment, AppointmentCreate, AppointmentUpdate]):
    """API operations for appointments."""

    endpoint = "/appointment"
    entity_schema = Appointment
    resource_label = "appointments"
    entity_label = "appointment"
    update_method = "PATCH"

    async def get_by_patient(
        self,
        patient_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Appointment]:
        return await self.get_all(with_filters(params, patientId=patient_id))

    async def get_by_date_range(
        self,
        start_date: date | str,
        end_date: date | str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Appointment]:
        return await self.get_all(
            with_filters(
                params,
                startDate=format_date(start_date),
                endDate=format_date(end_date),
            ),
        )

    async def update_status(self, appointment_id: str, status: AppointmentStatusEnum) -> Appointment:
        return await self.update(appointment_id, AppointmentUpdate(status=status))
