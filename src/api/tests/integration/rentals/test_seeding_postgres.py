"""Integration tests for seeding the system default payment methods.

These tests require PostgreSQL to be running.
"""

import asyncio

import pytest

from rentals.application.seeding import DefaultDataSeeder
from rentals.domain.records import PaymentMethod
from rentals.infrastructure.document_repository import DocumentRepository
from shared_kernel.middleware.tenant_context import TenantContext

pytestmark = pytest.mark.integration


async def _seed(database) -> int:
    async with database.session() as session, session.begin():
        repository = DocumentRepository(session, PaymentMethod, TenantContext.system())
        return await DefaultDataSeeder(repository).seed_defaults()


async def _system_names(database) -> list[str]:
    async with database.session() as session:
        repository = DocumentRepository(session, PaymentMethod, TenantContext.system())
        return sorted(m.name for m in await repository.get_all())


class TestSeedSystemDefaults:
    @pytest.mark.asyncio
    async def test_seeding_twice_inserts_once(self, database, clean_documents):
        first = await _seed(database)
        second = await _seed(database)

        assert first == 3
        assert second == 0
        assert await _system_names(database) == ["Bank Transfer", "Cash", "Check"]

    @pytest.mark.asyncio
    async def test_tenant_rows_do_not_block_seeding(
        self, database, tenant_id, clean_documents
    ):
        async with database.session() as session, session.begin():
            repository = DocumentRepository(
                session, PaymentMethod, TenantContext(tenant_id=tenant_id, source="header")
            )
            await repository.create(PaymentMethod(name="Cash"))

        assert await _seed(database) == 3

    @pytest.mark.asyncio
    async def test_overlapping_sessions_leave_one_set(self, database, clean_documents):
        """A second seeder racing an uncommitted first one inserts nothing.

        The second session's inserts wait on the first session's unique keys,
        fail once it commits, and its own transaction stays usable.
        """
        system = TenantContext.system()

        async with database.session() as session_a, database.session() as session_b:
            repository_a = DocumentRepository(session_a, PaymentMethod, system)
            repository_b = DocumentRepository(session_b, PaymentMethod, system)

            assert await DefaultDataSeeder(repository_a).seed_defaults() == 3

            racing = asyncio.create_task(DefaultDataSeeder(repository_b).seed_defaults())
            await asyncio.sleep(0.2)
            assert not racing.done()

            await session_a.commit()
            assert await asyncio.wait_for(racing, timeout=10) == 0

            assert await repository_b.count() == 3
            await session_b.commit()

        assert await _system_names(database) == ["Bank Transfer", "Cash", "Check"]
