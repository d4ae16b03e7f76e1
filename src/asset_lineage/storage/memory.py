# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Volatile in-memory versioned store.

Each key owns a list of ``(sequence, record)`` pairs in write order. Suitable
for testing and short-lived processes; data is lost when the process exits.
"""

from __future__ import annotations

import itertools
from collections.abc import AsyncIterator

from asset_lineage.errors import RecordNotFoundError
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.types import AssetRecord


class MemoryVersionedStore(VersionedStore):
    """In-memory, non-persistent VersionedStore implementation."""

    def __init__(self) -> None:
        self._versions: dict[str, list[tuple[int, AssetRecord]]] = {}
        self._current: dict[str, AssetRecord] = {}
        self._sequence = itertools.count(1)

    async def put(self, key: str, record: AssetRecord) -> int:
        sequence = next(self._sequence)
        self._versions.setdefault(key, []).append((sequence, record))
        self._current[key] = record
        return sequence

    async def get(self, key: str) -> AssetRecord:
        record = self._current.get(key)
        if record is None:
            raise RecordNotFoundError(key)
        return record

    async def exists(self, key: str) -> bool:
        return key in self._current

    async def delete(self, key: str) -> None:
        if key not in self._current:
            raise RecordNotFoundError(key)
        del self._current[key]

    async def scan_all(self) -> AsyncIterator[tuple[str, AssetRecord]]:
        # Snapshot taken up front so concurrent writes do not leak into the scan.
        snapshot = sorted(self._current.items())
        for key, record in snapshot:
            yield key, record

    async def history(self, key: str) -> AsyncIterator[AssetRecord]:
        snapshot = list(self._versions.get(key, []))
        for _sequence, record in reversed(snapshot):
            yield record
