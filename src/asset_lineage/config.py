# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class LineageConfig(BaseModel, frozen=True):
    """
    Configuration for the LineageReconstructor.

    Attributes:
        max_steps: Maximum number of cross-key splices a single lineage walk
            may perform before it is reported as malformed.
        timeout_seconds: Wall-clock budget for one lineage walk, checked at
            every splice. None disables the check.
    """

    max_steps: Annotated[int, Field(gt=0)] = 1000
    timeout_seconds: Annotated[float, Field(gt=0)] | None = None


class StoreConfig(BaseModel, frozen=True):
    """
    Configuration for persistent store backends.

    Attributes:
        fsync: When True, the file backend flushes every write to disk before
            returning.
    """

    fsync: bool = False


class AssetLineageConfig(BaseModel, frozen=True):
    """
    Top-level configuration.

    Example::

        config = AssetLineageConfig(
            lineage=LineageConfig(max_steps=64, timeout_seconds=2.0),
            store=StoreConfig(fsync=True),
        )
        contract = AssetTransferContract.from_file("ledger.ndjson", config=config)
    """

    lineage: LineageConfig = Field(default_factory=LineageConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
