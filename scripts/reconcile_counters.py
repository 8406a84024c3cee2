#!/usr/bin/env python3
"""Repair drifted post and discussion counters.

Usage:
    python scripts/reconcile_counters.py            # every user
    python scripts/reconcile_counters.py <user-id>  # one user
"""

import asyncio
import sys

import logfire

from agora.application.usecase.maintenance import (
    ReconcileCountersRequest,
    ReconcileCountersUseCase,
)
from agora.config import Settings
from agora.util.di.container import create_container
from agora.util.logging import get_logger, setup_logging
from agora.util.observability import configure_logfire

logger = get_logger(__name__)


async def reconcile(user_id: str | None) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ReconcileCountersUseCase)
            response = await use_case.execute(ReconcileCountersRequest(user_id=user_id))
    finally:
        await container.close()

    logger.info(f"Users corrected: {response.users_corrected}")
    for field, delta in response.deltas.items():
        logger.info(f"  {field}: {delta:+d}")
    return response.users_corrected


def main() -> int:
    """Run a reconciliation and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    user_id = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        asyncio.run(reconcile(user_id))
        return 0

    except Exception as e:
        logfire.error(
            "Counter reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
