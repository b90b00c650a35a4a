"""Seeding of system-owned default records.

Runs once per application start, before the app accepts traffic. Seeding
is a no-op as soon as any system payment method exists.

Concurrent starts against one store are safe: system defaults carry a
natural key (their name), the store holds a unique constraint on it, and
an insert rejected as a duplicate is treated as "another instance got
there first".
"""

from __future__ import annotations

from dataclasses import dataclass

from infrastructure.observability.startup_probe import (
    DefaultStartupProbe,
    StartupProbe,
)
from rentals.domain.records import PaymentMethod
from rentals.ports.exceptions import DuplicateRecordError
from rentals.ports.repositories import ITenantRepository
from shared_kernel.middleware.tenant_context import SYSTEM_TENANT_ID


@dataclass(frozen=True)
class SeedDescriptor:
    """Template for a default payment method inserted at startup."""

    name: str
    description: str

    def to_record(self) -> PaymentMethod:
        """Build the system default record described by this template."""
        return PaymentMethod(
            name=self.name,
            description=self.description,
            is_system_default=True,
            tenant_id=SYSTEM_TENANT_ID,
        )


DEFAULT_PAYMENT_METHODS: tuple[SeedDescriptor, ...] = (
    SeedDescriptor(name="Bank Transfer", description="Direct bank transfer payment"),
    SeedDescriptor(name="Cash", description="Cash payment"),
    SeedDescriptor(name="Check", description="Check payment"),
)


class DefaultDataSeeder:
    """Ensures the system default payment methods exist exactly once."""

    def __init__(
        self,
        repository: ITenantRepository[PaymentMethod],
        descriptors: tuple[SeedDescriptor, ...] = DEFAULT_PAYMENT_METHODS,
        probe: StartupProbe | None = None,
    ):
        """Initialize the seeder.

        Args:
            repository: Payment method repository bound to the system tenant
            descriptors: Default records to insert
            probe: Optional startup probe for observability

        Raises:
            ValueError: If the repository is not bound to the system tenant
        """
        if not repository.tenant.is_system:
            raise ValueError(
                f"Seeding requires a repository bound to the '{SYSTEM_TENANT_ID}' "
                f"tenant, got '{repository.tenant.tenant_id}'"
            )
        self._repository = repository
        self._descriptors = descriptors
        self._probe = probe or DefaultStartupProbe()

    async def seed_defaults(self) -> int:
        """Insert the default records unless any system record exists.

        Returns:
            Number of records inserted by this call

        Raises:
            StoreUnavailableError: If the store cannot be reached. Startup
                must abort in that case.
        """
        collection = PaymentMethod.collection
        try:
            existing = await self._repository.get_all()
            if existing:
                self._probe.defaults_already_present(collection, len(existing))
                return 0

            inserted = 0
            for descriptor in self._descriptors:
                try:
                    await self._repository.create(descriptor.to_record())
                except DuplicateRecordError:
                    self._probe.default_seeded_concurrently(collection, descriptor.name)
                    continue
                inserted += 1
        except Exception as e:
            self._probe.seeding_failed(collection, e)
            raise

        self._probe.defaults_seeded(collection, inserted)
        return inserted
