"""Test harness for unit and integration tests.

Integration tests assume a PostgreSQL server is reachable with the
configured ``DATABASE__URL`` and migrated to head.
"""

import pytest_asyncio

from agora.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    components unmocked and yields a request-scoped container. Everything
    resolved from one fixture value shares the same in-memory
    repositories.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_register(unit_env):
            service = await unit_env.get(AccountService)
            user = await service.register("alice", "alice@example.org", "pw", "pw")
            assert user.activated
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
