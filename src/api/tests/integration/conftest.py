"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Connection settings
come from the RENTTRACKER_DB_* environment variables; tests are skipped
when the database cannot be reached.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import delete, or_

from infrastructure.database.dependencies import Database
from infrastructure.settings import DatabaseSettings
from rentals.infrastructure.models import DocumentModel
from shared_kernel.middleware.tenant_context import SYSTEM_TENANT_ID

TEST_TENANT_PREFIX = "it-"


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        RENTTRACKER_DB_HOST, RENTTRACKER_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("RENTTRACKER_DB_HOST", "localhost"),
        port=int(os.getenv("RENTTRACKER_DB_PORT", "5432")),
        database=os.getenv("RENTTRACKER_DB_DATABASE", "renttracker"),
        username=os.getenv("RENTTRACKER_DB_USERNAME", "renttracker"),
        password=SecretStr(
            os.getenv("RENTTRACKER_DB_PASSWORD", "renttracker_dev_password")
        ),
        pool_size=5,
    )


@pytest_asyncio.fixture
async def database(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[Database, None]:
    """Provide an open Database with the documents table in place."""
    database = Database(integration_db_settings)
    database.open()
    if not await database.ping():
        await database.close()
        pytest.skip("PostgreSQL is not reachable with RENTTRACKER_DB_* settings")
    await database.create_schema()

    yield database

    await database.close()


@pytest.fixture
def tenant_id() -> str:
    """A tenant id no other test run uses."""
    return f"{TEST_TENANT_PREFIX}{uuid.uuid4().hex[:16]}"


@pytest.fixture
def other_tenant_id() -> str:
    """A second fresh tenant id for isolation checks."""
    return f"{TEST_TENANT_PREFIX}{uuid.uuid4().hex[:16]}"


@pytest_asyncio.fixture
async def clean_documents(database: Database) -> AsyncGenerator[None, None]:
    """Remove test tenants' rows and the system defaults around a test."""

    async def _clean() -> None:
        async with database.session() as session, session.begin():
            await session.execute(
                delete(DocumentModel).where(
                    or_(
                        DocumentModel.tenant_id.startswith(TEST_TENANT_PREFIX),
                        DocumentModel.tenant_id == SYSTEM_TENANT_ID,
                    )
                )
            )

    await _clean()
    yield
    await _clean()
