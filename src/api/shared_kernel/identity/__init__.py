"""Identifier primitives shared across bounded contexts."""

from shared_kernel.identity.sequential_id_generator import (
    SequentialIdGenerator,
    new_id,
    parse_id,
)

__all__ = ["SequentialIdGenerator", "new_id", "parse_id"]
