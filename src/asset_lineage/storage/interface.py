# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Abstract base class that every versioned store backend must implement.

Implementations must guarantee append-only semantics for history: a version
written through ``put`` is never altered or removed. ``delete`` only
tombstones the current value of a key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from asset_lineage.types import AssetRecord


class VersionedStore(ABC):
    """
    Contract for versioned key-value persistence backends.

    Every key maps to an ordered log of versions. Each ``put`` is assigned a
    store-wide, monotonically increasing sequence number which defines the
    order of versions. The store performs no locking; callers are expected to
    serialise mutations of the same key.
    """

    @abstractmethod
    async def put(self, key: str, record: AssetRecord) -> int:
        """
        Append ``record`` as the newest version under ``key``.

        The record becomes the key's current value. Returns the sequence
        number assigned to the write. Raises ``StoreFaultError`` if the
        medium fails.
        """
        ...

    @abstractmethod
    async def get(self, key: str) -> AssetRecord:
        """
        Return the current value of ``key``.

        Raises ``RecordNotFoundError`` if the key was never written or has
        been tombstoned.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True when ``key`` has a current value. Never raises for missing keys."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Tombstone the current value of ``key``; its history is kept.

        Raises ``RecordNotFoundError`` if the key has no current value.
        """
        ...

    @abstractmethod
    def scan_all(self) -> AsyncIterator[tuple[str, AssetRecord]]:
        """Yield ``(key, current value)`` for every live key, in lexicographic key order."""
        ...

    @abstractmethod
    def history(self, key: str) -> AsyncIterator[AssetRecord]:
        """
        Yield every version ever written under ``key``, newest first.

        Tombstoned keys still yield their versions. An unknown key yields
        nothing.
        """
        ...
