"""Workers repository layer."""

from __future__ import annotations

from podocare_client.modules.workers.schemas import Worker, WorkerCreate, WorkerUpdate
from podocare_client.shared.pagination import PaginatedResponse, PaginatedSearchParams
from podocare_client.shared.repository import ApiRepository, with_filters


class WorkerRepository(ApiRepository[Worker, WorkerCreate, WorkerUpdate]):
    """API operations for workers; the backend exposes them as users."""

    endpoint = "/user"
    entity_schema = Worker
    resource_label = "workers"
    entity_label = "worker"

    async def get_active_workers(
        self,
        params: PaginatedSearchParams | None = None,
    ) -> PaginatedResponse[Worker]:
        return await self.get_all(with_filters(params, active=True))

    async def update_active_status(self, worker_id: str, active: bool) -> Worker:
        return await self.update(worker_id, WorkerUpdate(active=active))
