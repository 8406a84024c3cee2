"""Reconcile counter caches use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import AccountService, CounterCacheService
from agora.domain.value import UserId


class ReconcileCountersRequest(BaseModel):
    """Reconcile one user, or everyone when ``user_id`` is omitted."""

    user_id: str | None = None


class ReconcileCountersResponse(BaseModel):
    """Sweep outcome. ``deltas`` is only filled for single-user runs."""

    users_corrected: int
    deltas: dict[str, int] = {}


class ReconcileCountersUseCase(BaseUseCase):
    """Use case for repairing drifted post and discussion counters."""

    def __init__(
        self,
        account_service: AccountService,
        counter_cache_service: CounterCacheService,
    ) -> None:
        self.account_service = account_service
        self.counter_cache_service = counter_cache_service

    async def execute(
        self, request: ReconcileCountersRequest
    ) -> ReconcileCountersResponse:
        if request.user_id is None:
            corrected = await self.counter_cache_service.reconcile_all()
            return ReconcileCountersResponse(users_corrected=corrected)

        user = await self.account_service.get_by_id(UserId(UUID(request.user_id)))
        deltas = await self.counter_cache_service.reconcile(user)
        return ReconcileCountersResponse(
            users_corrected=1 if deltas else 0, deltas=deltas
        )
