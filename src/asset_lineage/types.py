# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Shared type definitions for the asset-lineage package.

Record models are frozen Pydantic v2 models: a stored version is a snapshot
and is never rewritten. Updates and transfers append new versions instead.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AssetRecord(BaseModel):
    """
    One immutable version of an asset.

    ``previous_key`` and ``previous_commit_id`` are the back-links used to
    rebuild lineage. Both are empty on a root version. After a transfer,
    ``previous_commit_id`` points at the last version written under
    ``previous_key``; otherwise it points at the preceding version under
    ``current_key``.
    """

    model_config = ConfigDict(frozen=True)

    current_key: str
    previous_key: str = ""
    owner: str
    name: str
    colour: str
    size: str
    value: str
    commit_id: str
    previous_commit_id: str = ""
    timestamp: str

    @property
    def is_root(self) -> bool:
        """True when this version has no predecessor at all."""
        return self.previous_commit_id == ""


class AssetInput(BaseModel):
    """
    Caller-supplied descriptive fields for a new asset.

    Keys and commit identifiers are absent: the service assigns them.
    """

    model_config = ConfigDict(frozen=True)

    asset_id: str
    owner: str
    name: str
    colour: str
    size: str
    value: str


class LineageTrace(BaseModel):
    """Result of a full lineage walk, with the bookkeeping gathered on the way."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    versions: list[AssetRecord]
    root_owner: str | None = None
    segments: list[str]
    steps: int
