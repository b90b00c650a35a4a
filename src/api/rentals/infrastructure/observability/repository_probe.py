"""Domain probe for document repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant-scoped record persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe for document repository operations."""

    def record_created(self, record_id: str) -> None:
        """Record that a record was created."""
        ...

    def record_retrieved(self, record_id: str) -> None:
        """Record that a record was retrieved."""
        ...

    def record_not_found(self, record_id: str) -> None:
        """Record that a record was not found for the tenant."""
        ...

    def records_listed(self, count: int) -> None:
        """Record that records were listed."""
        ...

    def record_updated(self, record_id: str) -> None:
        """Record that a record was updated."""
        ...

    def record_deleted(self, record_id: str) -> None:
        """Record that a record was deleted."""
        ...

    def duplicate_record(self, natural_key: str | None) -> None:
        """Record that the store rejected a duplicate record."""
        ...

    def store_unavailable(self, operation: str, error: Exception) -> None:
        """Record that the store could not be reached."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRepositoryProbe(logger=self._logger, context=context)

    def record_created(self, record_id: str) -> None:
        self._logger.info(
            "record_created",
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def record_retrieved(self, record_id: str) -> None:
        self._logger.debug(
            "record_retrieved",
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def record_not_found(self, record_id: str) -> None:
        self._logger.debug(
            "record_not_found",
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def records_listed(self, count: int) -> None:
        self._logger.debug(
            "records_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def record_updated(self, record_id: str) -> None:
        self._logger.info(
            "record_updated",
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def record_deleted(self, record_id: str) -> None:
        self._logger.info(
            "record_deleted",
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def duplicate_record(self, natural_key: str | None) -> None:
        self._logger.warning(
            "duplicate_record_rejected",
            natural_key=natural_key,
            **self._get_context_kwargs(),
        )

    def store_unavailable(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "document_store_unavailable",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
