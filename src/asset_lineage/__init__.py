# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
asset-lineage — Versioned asset records with cross-key ownership lineage.

Public API surface:

    Classes:
        AssetTransferContract — Text-in/text-out facade over every operation
        AssetService          — create, read, update, transfer, delete
        LineageReconstructor  — history, sub-history and lineage walks
        MemoryVersionedStore  — Volatile in-memory store (default)
        FileVersionedStore    — Append-only NDJSON file store
        UUIDCommitContext     — Random commit ids
        SequenceCommitContext — Predictable commit ids

    Functions:
        export_json, export_csv, export_records — Serialise version lists
        canonicalise                             — Canonical JSON of one record

    Types:
        AssetRecord, AssetInput, LineageTrace, VersionedStore, CommitContext,
        AssetLineageConfig, LineageConfig, StoreConfig
"""

from asset_lineage.commit import CommitContext, SequenceCommitContext, UUIDCommitContext
from asset_lineage.config import AssetLineageConfig, LineageConfig, StoreConfig
from asset_lineage.contract import AssetTransferContract
from asset_lineage.errors import (
    AssetLineageError,
    AssetNotFoundError,
    ConfigurationError,
    LineageTimeoutError,
    MalformedLineageError,
    RecordNotFoundError,
    StoreFaultError,
)
from asset_lineage.export_formats import export_csv, export_json, export_records
from asset_lineage.lineage import LineageReconstructor
from asset_lineage.record import canonicalise, parse_record
from asset_lineage.service import AssetService
from asset_lineage.storage.file import FileVersionedStore
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.storage.memory import MemoryVersionedStore
from asset_lineage.types import AssetInput, AssetRecord, LineageTrace

__all__ = [
    # Core classes
    "AssetTransferContract",
    "AssetService",
    "LineageReconstructor",
    # Storage
    "VersionedStore",
    "MemoryVersionedStore",
    "FileVersionedStore",
    # Commit ids
    "CommitContext",
    "UUIDCommitContext",
    "SequenceCommitContext",
    # Config
    "AssetLineageConfig",
    "LineageConfig",
    "StoreConfig",
    # Record helpers
    "canonicalise",
    "parse_record",
    # Export helpers
    "export_json",
    "export_csv",
    "export_records",
    # Types
    "AssetRecord",
    "AssetInput",
    "LineageTrace",
    # Errors
    "AssetLineageError",
    "AssetNotFoundError",
    "RecordNotFoundError",
    "StoreFaultError",
    "MalformedLineageError",
    "LineageTimeoutError",
    "ConfigurationError",
]
