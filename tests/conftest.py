# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for asset-lineage tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from asset_lineage.commit import SequenceCommitContext
from asset_lineage.lineage import LineageReconstructor
from asset_lineage.service import AssetService
from asset_lineage.storage.memory import MemoryVersionedStore
from asset_lineage.types import AssetRecord


@pytest.fixture
def store() -> MemoryVersionedStore:
    """An empty in-memory store."""
    return MemoryVersionedStore()


@pytest.fixture
def service(store: MemoryVersionedStore) -> AssetService:
    """A service with predictable commit ids (tx-000001, tx-000002, ...)."""
    return AssetService(store, SequenceCommitContext())


@pytest.fixture
def reconstructor(store: MemoryVersionedStore) -> LineageReconstructor:
    """A reconstructor reading from the same store as ``service``."""
    return LineageReconstructor(store)


def _make_record(
    key: str,
    commit_id: str,
    previous_key: str = "",
    previous_commit_id: str = "",
    owner: str = "Freddie",
) -> AssetRecord:
    """Build a record directly, bypassing the service, for hand-crafted histories."""
    return AssetRecord(
        current_key=key,
        previous_key=previous_key,
        owner=owner,
        name="asset1",
        colour="red",
        size="5",
        value="300",
        commit_id=commit_id,
        previous_commit_id=previous_commit_id,
        timestamp="2026-01-01T00:00:00Z",
    )


@pytest.fixture
def make_record() -> Callable[..., AssetRecord]:
    """Factory for hand-crafted versions, bypassing the service."""
    return _make_record
