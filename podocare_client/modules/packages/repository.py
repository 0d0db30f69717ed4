"""Packages repository layer."""

from __future__ import annotations

from podocare_client.modules.packages.schemas import (
    Package,
    PackageCreate,
    PackageSession,
    PackageSessionUse,
    PackageUpdate,
    PatientPackage,
    PatientPackageCreate,
    PatientPackageUpdate,
)
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, dump_payload, with_filters


class PackageRepository(ApiRepository[Package, PackageCreate, PackageUpdate]):
    """API operations for the session package catalog."""

    endpoint = "/packages"
    entity_schema = Package
    resource_label = "packages"
    entity_label = "package"

    async def get_active_packages(
        self,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Package]:
        return await self.get_all(with_filters(params, active=True))


class PatientPackageRepository(
    ApiRepository[PatientPackage, PatientPackageCreate, PatientPackageUpdate],
):
    """API operations for packages sold to patients."""

    endpoint = "/patient-packages"
    entity_schema = PatientPackage
    resource_label = "patient packages"
    entity_label = "patient package"

    async def get_by_patient(
        self,
        patient_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[PatientPackage]:
        return await self.get_all(with_filters(params, patientId=patient_id))

    async def get_active_by_patient(
        self,
        patient_id: str,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[PatientPackage]:
        return await self.get_all(with_filters(params, patientId=patient_id, active=True))

    async def use_session(self, patient_package_id: str, payload: PackageSessionUse) -> PackageSession:
        """Consume one session; the backend decrements ``remainingSessions``."""
        return await self._send_entity(
            "POST",
            self._path(patient_package_id, "use-session"),
            dump_payload(payload, partial=True),
            "Failed to use package session",
            PackageSession,
        )

    async def get_session_history(self, patient_package_id: str) -> list[PackageSession]:
        return await self._get_collection(
            self._path(patient_package_id, "sessions"),
            "Failed to fetch package sessions",
            PackageSession,
        )
