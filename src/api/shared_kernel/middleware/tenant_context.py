"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The actual resolution logic (header extraction and validation) lives in
the rentals bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass

SYSTEM_TENANT_ID = "system"


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request or operation.

    This is a shared kernel value object used to carry the tenant identity
    into every repository. Repositories cannot be built without one.

    Attributes:
        tenant_id: The validated tenant identifier.
        source: How the tenant was resolved - 'header' if from X-Tenant-ID,
            'system' for the shared system tenant used by seeding.
    """

    tenant_id: str
    source: str

    def __post_init__(self) -> None:
        if not isinstance(self.tenant_id, str) or not self.tenant_id.strip():
            raise ValueError("tenant_id must be a non-empty string")

    @property
    def is_system(self) -> bool:
        """Whether this context addresses the shared system tenant."""
        return self.tenant_id == SYSTEM_TENANT_ID

    @classmethod
    def system(cls) -> TenantContext:
        """Context for system-owned default data."""
        return cls(tenant_id=SYSTEM_TENANT_ID, source="system")
