# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
AssetService — the mutation API over a VersionedStore.

Each mutation reads at most one current version, builds exactly one new
version and performs a single ``put`` (or ``delete``). A failure before that
call leaves the store untouched.

Usage::

    service = AssetService(MemoryVersionedStore(), UUIDCommitContext())
    await service.create_asset("X1", "Freddie", "asset1", "red", "5", "300", "t0")
    await service.transfer_asset("X1", "X2", "John", "t1")
"""

from __future__ import annotations

import logging

from asset_lineage.commit import CommitContext
from asset_lineage.errors import AssetNotFoundError, RecordNotFoundError
from asset_lineage.record import (
    build_root_record,
    build_transferred_record,
    build_updated_record,
)
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.types import AssetInput, AssetRecord

logger = logging.getLogger("asset_lineage.service")

# Assets written by ``init_ledger``.
SAMPLE_ASSETS: tuple[AssetInput, ...] = (
    AssetInput(asset_id="N6ATOE3", owner="Freddie", name="asset1", colour="red", size="5", value="300"),
    AssetInput(asset_id="2HZLO9R", owner="Brian", name="asset2", colour="blue", size="10", value="400"),
    AssetInput(asset_id="TQ55HXI", owner="Roger", name="asset3", colour="green", size="15", value="500"),
)


class AssetService:
    """
    Create, read, update, transfer and delete assets.

    Parameters
    ----------
    store:
        Versioned store that receives one history entry per mutation.
    commit_context:
        Source of commit ids for new versions.
    """

    def __init__(
        self,
        store: VersionedStore,
        commit_context: CommitContext,
    ) -> None:
        self._store = store
        self._commit_context = commit_context

    @property
    def store(self) -> VersionedStore:
        return self._store

    async def init_ledger(self, timestamp: str) -> list[AssetRecord]:
        """Seed the store with the sample assets, all stamped with ``timestamp``."""
        created: list[AssetRecord] = []
        for asset in SAMPLE_ASSETS:
            created.append(await self._create(asset, timestamp))
        logger.info("ledger_initialised", extra={"asset_count": len(created)})
        return created

    async def create_asset(
        self,
        asset_id: str,
        owner: str,
        name: str,
        colour: str,
        size: str,
        value: str,
        timestamp: str,
    ) -> AssetRecord:
        """
        Write a new root version under ``asset_id``.

        An existing key is not rejected: the new root simply becomes the
        key's newest version. Check ``asset_exists`` first when uniqueness
        matters.
        """
        asset = AssetInput(
            asset_id=asset_id,
            owner=owner,
            name=name,
            colour=colour,
            size=size,
            value=value,
        )
        return await self._create(asset, timestamp)

    async def read_asset(self, asset_id: str) -> AssetRecord:
        """Return the current version of ``asset_id``."""
        try:
            return await self._store.get(asset_id)
        except RecordNotFoundError as exc:
            raise AssetNotFoundError(asset_id) from exc

    async def asset_exists(self, asset_id: str) -> bool:
        exists = await self._store.exists(asset_id)
        logger.debug("asset_exists", extra={"asset_id": asset_id, "exists": exists})
        return exists

    async def update_asset(
        self,
        asset_id: str,
        name: str,
        colour: str,
        size: str,
        value: str,
        timestamp: str,
    ) -> AssetRecord:
        """
        Append a new version of ``asset_id`` with replaced descriptive fields.

        Owner and ``previous_key`` are carried over. The new version's
        ``previous_commit_id`` is the commit id of the version it replaces.
        """
        current = await self.read_asset(asset_id)
        record = build_updated_record(
            current,
            self._commit_context.new_commit_id(),
            timestamp,
            name=name,
            colour=colour,
            size=size,
            value=value,
        )
        await self._store.put(asset_id, record)
        logger.info(
            "asset_updated",
            extra={
                "asset_id": asset_id,
                "commit_id": record.commit_id,
                "previous_commit_id": record.previous_commit_id,
            },
        )
        return record

    async def transfer_asset(
        self,
        asset_id: str,
        new_asset_id: str,
        new_owner: str,
        timestamp: str,
    ) -> AssetRecord:
        """
        Hand ``asset_id`` to ``new_owner`` under the new key ``new_asset_id``.

        The source key is left exactly as it was and stays independently
        readable and writable.
        """
        source = await self.read_asset(asset_id)
        record = build_transferred_record(
            source,
            new_asset_id,
            new_owner,
            self._commit_context.new_commit_id(),
            timestamp,
        )
        await self._store.put(new_asset_id, record)
        logger.info(
            "asset_transferred",
            extra={
                "asset_id": asset_id,
                "new_asset_id": new_asset_id,
                "previous_owner": source.owner,
                "new_owner": new_owner,
                "commit_id": record.commit_id,
            },
        )
        return record

    async def delete_asset(self, asset_id: str) -> None:
        """Tombstone the current value of ``asset_id``. History is kept."""
        try:
            await self._store.delete(asset_id)
        except RecordNotFoundError as exc:
            raise AssetNotFoundError(asset_id) from exc
        logger.info("asset_deleted", extra={"asset_id": asset_id})

    async def get_all_assets(self) -> list[AssetRecord]:
        """Return the current version of every live asset, ordered by key."""
        return [record async for _key, record in self._store.scan_all()]

    def get_transaction_id(self) -> str:
        """Return a fresh commit id from the commit context."""
        return self._commit_context.new_commit_id()

    async def _create(self, asset: AssetInput, timestamp: str) -> AssetRecord:
        record = build_root_record(asset, self._commit_context.new_commit_id(), timestamp)
        await self._store.put(asset.asset_id, record)
        logger.info(
            "asset_created",
            extra={
                "asset_id": asset.asset_id,
                "owner": asset.owner,
                "commit_id": record.commit_id,
            },
        )
        return record
