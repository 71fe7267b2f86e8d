"""Per-petition write locks.

Each petition ID gets its own asyncio.Lock, so writes to one petition are
strictly serialized while writes to different petitions proceed
independently. A lock exists only while some operation holds or waits on
it: the last holder to leave removes it, so IDs that were never valid
(or petitions that were deleted) leave nothing behind.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class PetitionLockRegistry:
    """Hands out one asyncio.Lock per petition ID.

    One registry must be shared by every controller writing to the same
    stores; separate registries give no mutual exclusion.
    """

    def __init__(self) -> None:
        """Initialize with no locks."""
        self._entries: dict[UUID, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, petition_id: UUID) -> AsyncIterator[None]:
        """Hold the exclusive lock for ``petition_id`` for the block.

        Waiters are counted from the moment they ask for the lock, so the
        entry is never removed while anyone is queued on it.
        """
        entry = self._entries.get(petition_id)
        if entry is None:
            entry = _LockEntry()
            self._entries[petition_id] = entry
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0 and self._entries.get(petition_id) is entry:
                del self._entries[petition_id]

    def is_locked(self, petition_id: UUID) -> bool:
        entry = self._entries.get(petition_id)
        return entry is not None and entry.lock.locked()

    def __len__(self) -> int:
        return len(self._entries)
