# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
AssetTransferContract — text-in / text-out entry point for every operation.

The contract coordinates two collaborators that do not know about each other:

1. ``AssetService`` — mutations that append versions to the store.
2. ``LineageReconstructor`` — read-only history and lineage queries.

Records leave the contract as canonical JSON (sorted keys, compact
separators), so the same field values always produce the same text.

Usage::

    from asset_lineage import AssetTransferContract

    contract = AssetTransferContract.in_memory()
    await contract.create_asset("X1", "Freddie", "asset1", "red", "5", "300", "t0")
    await contract.transfer_asset("X1", "X2", "John", "t1")
    lineage_json = await contract.get_tx_history("X2")
"""

from __future__ import annotations

from pathlib import Path

from asset_lineage.commit import CommitContext, UUIDCommitContext
from asset_lineage.config import AssetLineageConfig
from asset_lineage.lineage import LineageReconstructor
from asset_lineage.record import canonicalise, canonicalise_many
from asset_lineage.service import AssetService
from asset_lineage.storage.file import FileVersionedStore
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.storage.memory import MemoryVersionedStore


class AssetTransferContract:
    """
    Facade over AssetService and LineageReconstructor sharing one store.

    Parameters
    ----------
    service:
        Mutation API.
    reconstructor:
        Query API. Must read from the same store ``service`` writes to.
    """

    def __init__(self, service: AssetService, reconstructor: LineageReconstructor) -> None:
        self._service = service
        self._reconstructor = reconstructor

    @classmethod
    def from_store(
        cls,
        store: VersionedStore,
        commit_context: CommitContext | None = None,
        config: AssetLineageConfig | None = None,
    ) -> AssetTransferContract:
        """Build a contract whose service and reconstructor share ``store``."""
        config = config or AssetLineageConfig()
        service = AssetService(store, commit_context or UUIDCommitContext())
        return cls(service, LineageReconstructor(store, config.lineage))

    @classmethod
    def in_memory(
        cls,
        commit_context: CommitContext | None = None,
        config: AssetLineageConfig | None = None,
    ) -> AssetTransferContract:
        """Build a contract on a fresh ``MemoryVersionedStore``."""
        return cls.from_store(MemoryVersionedStore(), commit_context, config)

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        commit_context: CommitContext | None = None,
        config: AssetLineageConfig | None = None,
    ) -> AssetTransferContract:
        """Build a contract on a ``FileVersionedStore`` configured from ``config.store``."""
        config = config or AssetLineageConfig()
        store = FileVersionedStore(file_path, config.store)
        return cls.from_store(store, commit_context, config)

    @property
    def service(self) -> AssetService:
        return self._service

    @property
    def reconstructor(self) -> LineageReconstructor:
        return self._reconstructor

    # ─── Mutations ────────────────────────────────────────────────────────────

    async def init_ledger(self, timestamp: str) -> None:
        await self._service.init_ledger(timestamp)

    async def create_asset(
        self,
        asset_id: str,
        owner: str,
        name: str,
        colour: str,
        size: str,
        value: str,
        timestamp: str,
    ) -> str:
        """Create an asset and return its first version as canonical JSON."""
        record = await self._service.create_asset(
            asset_id, owner, name, colour, size, value, timestamp
        )
        return canonicalise(record)

    async def update_asset(
        self,
        asset_id: str,
        name: str,
        colour: str,
        size: str,
        value: str,
        timestamp: str,
    ) -> None:
        await self._service.update_asset(asset_id, name, colour, size, value, timestamp)

    async def transfer_asset(
        self,
        asset_id: str,
        new_asset_id: str,
        new_owner: str,
        timestamp: str,
    ) -> None:
        await self._service.transfer_asset(asset_id, new_asset_id, new_owner, timestamp)

    async def delete_asset(self, asset_id: str) -> None:
        await self._service.delete_asset(asset_id)

    # ─── Reads ────────────────────────────────────────────────────────────────

    async def read_asset(self, asset_id: str) -> str:
        return canonicalise(await self._service.read_asset(asset_id))

    async def asset_exists(self, asset_id: str) -> bool:
        return await self._service.asset_exists(asset_id)

    async def get_all_assets(self) -> str:
        return canonicalise_many(await self._service.get_all_assets())

    def get_transaction_id(self) -> str:
        return self._service.get_transaction_id()

    # ─── History ──────────────────────────────────────────────────────────────

    async def get_asset_history(self, asset_id: str) -> str:
        return canonicalise_many(await self._reconstructor.get_asset_history(asset_id))

    async def get_sub_history(self, asset_id: str, marker_commit_id: str) -> str:
        return canonicalise_many(
            await self._reconstructor.get_sub_history(asset_id, marker_commit_id)
        )

    async def get_tx_history(self, asset_id: str) -> str:
        return canonicalise_many(await self._reconstructor.get_tx_history(asset_id))
