"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, app_name: str, version: str) -> None:
        """Record that the application lifespan started."""
        ...

    def defaults_seeded(self, collection: str, inserted: int) -> None:
        """Record that system default records were inserted."""
        ...

    def defaults_already_present(self, collection: str, existing: int) -> None:
        """Record that seeding was skipped because defaults already exist."""
        ...

    def default_seeded_concurrently(self, collection: str, name: str) -> None:
        """Record that another instance inserted a default first."""
        ...

    def seeding_failed(self, collection: str, error: Exception) -> None:
        """Record that seeding failed and startup will abort."""
        ...

    def application_stopped(self) -> None:
        """Record that the application lifespan finished."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, app_name: str, version: str) -> None:
        """Record that the application lifespan started."""
        self._logger.info(
            "application_starting",
            app_name=app_name,
            version=version,
            **self._get_context_kwargs(),
        )

    def defaults_seeded(self, collection: str, inserted: int) -> None:
        """Record that system default records were inserted."""
        self._logger.info(
            "system_defaults_seeded",
            collection=collection,
            inserted=inserted,
            **self._get_context_kwargs(),
        )

    def defaults_already_present(self, collection: str, existing: int) -> None:
        """Record that seeding was skipped because defaults already exist."""
        self._logger.info(
            "system_defaults_already_present",
            collection=collection,
            existing=existing,
            **self._get_context_kwargs(),
        )

    def default_seeded_concurrently(self, collection: str, name: str) -> None:
        """Record that another instance inserted a default first."""
        self._logger.info(
            "system_default_seeded_concurrently",
            collection=collection,
            name=name,
            **self._get_context_kwargs(),
        )

    def seeding_failed(self, collection: str, error: Exception) -> None:
        """Record that seeding failed and startup will abort."""
        self._logger.error(
            "system_defaults_seeding_failed",
            collection=collection,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that the application lifespan finished."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
