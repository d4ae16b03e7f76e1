# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Read-only lineage queries over a VersionedStore.

LineageReconstructor never writes and never talks to AssetService. Everything
it knows about an asset's past comes from the back-links stored inside the
versions it reads.

History order is the store's: newest version first. A transferred key's
oldest version is therefore always the last element of its history, and that
element's ``previous_key`` / ``previous_commit_id`` pair says where the walk
continues.
"""

from __future__ import annotations

import asyncio
import logging
import time

from asset_lineage.config import LineageConfig
from asset_lineage.errors import LineageTimeoutError, MalformedLineageError
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.types import AssetRecord, LineageTrace

logger = logging.getLogger("asset_lineage.lineage")


class LineageReconstructor:
    """
    History, sub-history and cross-key lineage queries.

    Parameters
    ----------
    store:
        The store to read from.
    config:
        Step and time budget for lineage walks. Defaults to ``LineageConfig()``.
    """

    def __init__(self, store: VersionedStore, config: LineageConfig | None = None) -> None:
        self._store = store
        self._config = config or LineageConfig()

    async def get_asset_history(self, asset_id: str) -> list[AssetRecord]:
        """
        Return every version written under ``asset_id``, newest first.

        No cross-key traversal. An unknown key gives an empty list.
        """
        return [record async for record in self._store.history(asset_id)]

    async def get_sub_history(self, asset_id: str, marker_commit_id: str) -> list[AssetRecord]:
        """
        Return the part of ``asset_id``'s history from ``marker_commit_id`` onwards.

        The result is the contiguous suffix of ``get_asset_history`` that
        starts at the first version whose commit id equals the marker, marker
        included. Empty when the marker never appears.
        """
        history = await self.get_asset_history(asset_id)
        for index, record in enumerate(history):
            if record.commit_id == marker_commit_id:
                return history[index:]
        return []

    async def get_tx_history(self, asset_id: str) -> list[AssetRecord]:
        """
        Return the full transaction history of ``asset_id`` across every key
        it has been known by.

        The list starts with the asset's own history and continues with the
        matching suffix of each earlier key's history, ending at a root
        version.

        Raises
        ------
        MalformedLineageError
            When the back-links loop, exceed ``max_steps`` or point at a
            version that does not exist.
        LineageTimeoutError
            When the walk runs past ``timeout_seconds``.
        """
        trace = await self.trace_lineage(asset_id)
        return trace.versions

    async def trace_lineage(self, asset_id: str) -> LineageTrace:
        """
        Walk the lineage of ``asset_id`` and return it with walk metadata.

        Same walk and same failures as ``get_tx_history``. A walk that fails
        never returns the versions collected so far.
        """
        started = time.monotonic()
        versions = await self.get_asset_history(asset_id)
        if not versions:
            return LineageTrace(asset_id=asset_id, versions=[], segments=[], steps=0)

        segments = [asset_id]
        visited: set[tuple[str, str]] = set()
        steps = 0

        while True:
            last = versions[-1]
            if last.is_root:
                logger.info(
                    "lineage_root_reached",
                    extra={
                        "asset_id": asset_id,
                        "root_key": last.current_key,
                        "root_owner": last.owner,
                        "steps": steps,
                    },
                )
                return LineageTrace(
                    asset_id=asset_id,
                    versions=versions,
                    root_owner=last.owner,
                    segments=segments,
                    steps=steps,
                )

            splice = (last.previous_key, last.previous_commit_id)
            if splice in visited:
                raise MalformedLineageError(
                    asset_id, splice[0], splice[1], steps, "back-link cycle detected"
                )
            if steps >= self._config.max_steps:
                raise MalformedLineageError(
                    asset_id,
                    splice[0],
                    splice[1],
                    steps,
                    f"step budget of {self._config.max_steps} exhausted",
                )

            # Cancellation point between splices.
            await asyncio.sleep(0)
            self._check_deadline(asset_id, started, steps)

            visited.add(splice)
            segment = await self.get_sub_history(*splice)
            if not segment:
                raise MalformedLineageError(
                    asset_id,
                    splice[0],
                    splice[1],
                    steps,
                    "previous commit not found under previous key",
                )

            logger.debug(
                "lineage_segment_spliced",
                extra={
                    "asset_id": asset_id,
                    "previous_key": splice[0],
                    "previous_commit_id": splice[1],
                    "segment_length": len(segment),
                },
            )
            versions.extend(segment)
            segments.append(splice[0])
            steps += 1

    def _check_deadline(self, asset_id: str, started: float, steps: int) -> None:
        timeout = self._config.timeout_seconds
        if timeout is not None and time.monotonic() - started > timeout:
            logger.warning(
                "lineage_walk_timed_out",
                extra={"asset_id": asset_id, "steps": steps, "timeout_seconds": timeout},
            )
            raise LineageTimeoutError(asset_id, timeout, steps)
