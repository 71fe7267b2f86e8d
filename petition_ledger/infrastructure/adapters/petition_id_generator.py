"""Petition identifier generators.

Two implementations of PetitionIdGeneratorProtocol:
- UuidPetitionIdGenerator: random UUID4 identifiers (production default)
- SequentialPetitionIdGenerator: deterministic UUID(int=n) identifiers,
  so tests can predict and control ID assignment
"""

from __future__ import annotations

import threading
from uuid import UUID, uuid4


class UuidPetitionIdGenerator:
    """Allocate random UUID4 identifiers."""

    def next_id(self) -> UUID:
        return uuid4()


class SequentialPetitionIdGenerator:
    """Allocate identifiers from an explicit, monotonically increasing sequence.

    The sequence is owned by the instance, not the process, and starts at
    ``start``. ``UUID(int=0)`` is the first ID with the default start,
    matching a zero-based petition counter.

    Attributes:
        start: First sequence value handed out.
    """

    def __init__(self, start: int = 0) -> None:
        """Initialize the sequence.

        Args:
            start: First sequence value (non-negative).

        Raises:
            ValueError: If start is negative.
        """
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> UUID:
        with self._lock:
            value = self._next
            self._next += 1
        return UUID(int=value)

    @property
    def issued(self) -> int:
        """Next sequence value that will be handed out."""
        return self._next
