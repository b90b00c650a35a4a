"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI

from infrastructure.database.dependencies import Database, get_database
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import get_database_settings, get_settings
from infrastructure.version import __version__
from rentals.application.seeding import DefaultDataSeeder
from rentals.domain.records import PaymentMethod
from rentals.infrastructure.document_repository import DocumentRepository
from rentals.infrastructure.models import DocumentModel  # noqa: F401 (registers table)
from rentals.presentation import router as rentals_router
from shared_kernel.middleware.tenant_context import TenantContext


async def seed_system_defaults(database: Database, probe: StartupProbe) -> int:
    """Insert the system default payment methods in one transaction.

    Returns:
        Number of defaults inserted (0 when already seeded)
    """
    async with database.session() as session:
        async with session.begin():
            repository = DocumentRepository(
                session=session,
                record_type=PaymentMethod,
                tenant=TenantContext.system(),
            )
            seeder = DefaultDataSeeder(repository=repository, probe=probe)
            return await seeder.seed_defaults()


@asynccontextmanager
async def renttracker_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (opened at startup, disposed on shutdown)
    - Seeding of system defaults before any request is served

    A seeding failure propagates and aborts startup.
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()
    probe.application_starting(app_name=settings.app_name, version=__version__)

    database = Database(get_database_settings())
    database.open()
    app.state.database = database
    try:
        if settings.create_schema:
            await database.create_schema()
        if settings.seed_defaults:
            await seed_system_defaults(database, probe)
        yield
    finally:
        await database.close()
        probe.application_stopped()


app = FastAPI(
    title="Rent Tracker API",
    description="Tenant-scoped tracking of rental properties and rent payments",
    version=__version__,
    lifespan=renttracker_lifespan,
)

app.include_router(rentals_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    database: Annotated[Database, Depends(get_database)],
) -> dict:
    """Check document store connectivity."""
    is_healthy = await database.ping()
    return {
        "status": "ok" if is_healthy else "unhealthy",
        "connected": is_healthy,
    }
