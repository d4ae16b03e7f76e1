# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Helpers for constructing and serialising AssetRecord versions.

There are exactly three ways a version comes into being:

1. ``build_root_record`` — a freshly created asset with no back-links.
2. ``build_updated_record`` — a new version under the same key; the
   ``previous_commit_id`` back-link points at the version it replaces.
3. ``build_transferred_record`` — the first version under a new key; both
   back-links point at the source key's current version.

Builders never touch storage. Commit ids are passed in by the caller.
"""

from __future__ import annotations

import json
from typing import Any

from asset_lineage.types import AssetInput, AssetRecord


def build_root_record(
    asset: AssetInput,
    commit_id: str,
    timestamp: str,
) -> AssetRecord:
    """Return the first version of a brand-new asset."""
    return AssetRecord(
        current_key=asset.asset_id,
        previous_key="",
        owner=asset.owner,
        name=asset.name,
        colour=asset.colour,
        size=asset.size,
        value=asset.value,
        commit_id=commit_id,
        previous_commit_id="",
        timestamp=timestamp,
    )


def build_updated_record(
    current: AssetRecord,
    commit_id: str,
    timestamp: str,
    *,
    name: str,
    colour: str,
    size: str,
    value: str,
) -> AssetRecord:
    """
    Return the successor of ``current`` under the same key.

    Owner and ``previous_key`` carry over unchanged; the descriptive fields
    and timestamp are replaced.
    """
    return current.model_copy(
        update={
            "name": name,
            "colour": colour,
            "size": size,
            "value": value,
            "timestamp": timestamp,
            "previous_commit_id": current.commit_id,
            "commit_id": commit_id,
        }
    )


def build_transferred_record(
    source: AssetRecord,
    new_key: str,
    new_owner: str,
    commit_id: str,
    timestamp: str,
) -> AssetRecord:
    """
    Return the first version of ``source`` under ``new_key``.

    The pair (``previous_key``, ``previous_commit_id``) is the splice point
    the lineage walk follows back into the source key's history.
    """
    return source.model_copy(
        update={
            "current_key": new_key,
            "previous_key": source.current_key,
            "owner": new_owner,
            "timestamp": timestamp,
            "previous_commit_id": source.commit_id,
            "commit_id": commit_id,
        }
    )


def canonicalise(record: AssetRecord) -> str:
    """
    Produce the deterministic JSON form of a record.

    Keys are sorted and separators are compact, so two records with the same
    field values always serialise to the same bytes.
    """
    return _dumps(record.model_dump(mode="json"))


def canonicalise_many(records: list[AssetRecord]) -> str:
    """Canonical JSON array of records, in the order given."""
    return _dumps([record.model_dump(mode="json") for record in records])


def parse_record(payload: str | bytes | dict[str, Any]) -> AssetRecord:
    """Validate a serialised record back into an ``AssetRecord``."""
    if isinstance(payload, dict):
        return AssetRecord.model_validate(payload)
    return AssetRecord.model_validate_json(payload)


def _dumps(data: Any) -> str:
    return json.dumps(data, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
