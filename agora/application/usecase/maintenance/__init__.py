"""Maintenance use cases."""

from agora.application.usecase.maintenance.reconcile_counters import (
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)

__all__ = [
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
]
