# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Export helpers — serialise AssetRecord lists to JSON and CSV.

- JSON: standard JSON array, human-readable with 2-space indentation.
- CSV:  RFC 4180 CSV with a header row; every column present on every row.

Both keep the order of the input list, so a lineage exported here reads the
same way ``get_tx_history`` returned it.
"""

from __future__ import annotations

import csv
import io
import json

from asset_lineage.types import AssetRecord

# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def export_json(records: list[AssetRecord]) -> str:
    """Serialise records to a JSON array string with 2-space indentation."""
    return json.dumps(
        [record.model_dump(mode="json") for record in records],
        indent=2,
        ensure_ascii=False,
    )


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------

CSV_COLUMNS: list[str] = [
    "current_key",
    "previous_key",
    "owner",
    "name",
    "colour",
    "size",
    "value",
    "commit_id",
    "previous_commit_id",
    "timestamp",
]


def export_csv(records: list[AssetRecord]) -> str:
    """
    Serialise records to CSV format.

    The first row contains column headers. Empty back-links are written as
    empty cells.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        raw = record.model_dump(mode="json")
        writer.writerow([raw[column] for column in CSV_COLUMNS])
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def export_records(records: list[AssetRecord], export_format: str) -> str:
    """
    Export records in the requested format.

    Raises ValueError for unsupported format strings.
    """
    if export_format == "json":
        return export_json(records)
    if export_format == "csv":
        return export_csv(records)
    raise ValueError(
        f'Unsupported export format: "{export_format}". Valid values are "json" and "csv".'
    )
