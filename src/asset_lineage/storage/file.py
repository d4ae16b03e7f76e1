# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Append-only file storage backend.

Every write is one JSON object per line (NDJSON / JSON Lines format)::

    {"key":"X1","op":"put","record":{...},"sequence":1}
    {"key":"X1","op":"delete","record":null,"sequence":2}

The file is only ever opened in append mode and never truncated or
rewritten. Reads replay the log from disk, so the in-process view stays
consistent with anything written by other processes. The replayed state is
cached against the file's size and modification time and rebuilt whenever
either changes. A line that cannot be decoded raises StoreFaultError.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from asset_lineage.config import StoreConfig
from asset_lineage.errors import ConfigurationError, RecordNotFoundError, StoreFaultError
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.types import AssetRecord

logger = logging.getLogger("asset_lineage.storage")

_BACKEND = "file"


@dataclass
class _Replay:
    """State rebuilt from the log."""

    versions: dict[str, list[AssetRecord]] = field(default_factory=dict)
    current: dict[str, AssetRecord] = field(default_factory=dict)
    last_sequence: int = 0


class FileVersionedStore(VersionedStore):
    """
    Persistent, append-only NDJSON VersionedStore implementation.

    Parameters
    ----------
    file_path:
        Path to the NDJSON log. The file is created on the first write.
    config:
        Store options. ``fsync=True`` forces each write to disk before
        ``put``/``delete`` return.
    """

    def __init__(self, file_path: str | Path, config: StoreConfig | None = None) -> None:
        self._file_path = Path(file_path)
        if self._file_path.is_dir():
            raise ConfigurationError(f"Store path {self._file_path} is a directory, not a file.")
        self._config = config or StoreConfig()
        # Guards replay + append: one sequence number per write.
        self._write_lock = asyncio.Lock()
        self._cache: tuple[tuple[int, int], _Replay] | None = None

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def config(self) -> StoreConfig:
        return self._config

    async def put(self, key: str, record: AssetRecord) -> int:
        async with self._write_lock:
            state = await self._replay()
            sequence = state.last_sequence + 1
            await self._append_entry(
                {
                    "key": key,
                    "op": "put",
                    "record": record.model_dump(mode="json"),
                    "sequence": sequence,
                }
            )
        return sequence

    async def get(self, key: str) -> AssetRecord:
        state = await self._replay()
        record = state.current.get(key)
        if record is None:
            raise RecordNotFoundError(key)
        return record

    async def exists(self, key: str) -> bool:
        state = await self._replay()
        return key in state.current

    async def delete(self, key: str) -> None:
        async with self._write_lock:
            state = await self._replay()
            if key not in state.current:
                raise RecordNotFoundError(key)
            await self._append_entry(
                {
                    "key": key,
                    "op": "delete",
                    "record": None,
                    "sequence": state.last_sequence + 1,
                }
            )

    async def scan_all(self) -> AsyncIterator[tuple[str, AssetRecord]]:
        state = await self._replay()
        for key in sorted(state.current):
            yield key, state.current[key]

    async def history(self, key: str) -> AsyncIterator[AssetRecord]:
        state = await self._replay()
        for record in reversed(state.versions.get(key, [])):
            yield record

    async def _append_entry(self, entry: dict[str, object]) -> None:
        line = json.dumps(entry, sort_keys=True, ensure_ascii=False, separators=(",", ":")) + "\n"
        try:
            async with aiofiles.open(self._file_path, mode="a", encoding="utf-8") as file_handle:
                await file_handle.write(line)
                if self._config.fsync:
                    await file_handle.flush()
                    os.fsync(file_handle.fileno())
        except OSError as exc:
            raise StoreFaultError(
                f"Could not append to {self._file_path}: {exc}", backend=_BACKEND
            ) from exc

    async def _replay(self) -> _Replay:
        if not await aiofiles.os.path.exists(self._file_path):
            return _Replay()

        try:
            stat = await aiofiles.os.stat(self._file_path)
        except OSError as exc:
            raise StoreFaultError(
                f"Could not stat {self._file_path}: {exc}", backend=_BACKEND
            ) from exc
        signature = (stat.st_size, stat.st_mtime_ns)
        if self._cache is not None and self._cache[0] == signature:
            return self._cache[1]

        state = _Replay()
        try:
            async with aiofiles.open(self._file_path, mode="r", encoding="utf-8") as file_handle:
                line_number = 0
                async for line in file_handle:
                    line_number += 1
                    stripped = line.strip()
                    if not stripped:
                        continue
                    self._apply_line(state, stripped, line_number)
        except OSError as exc:
            raise StoreFaultError(
                f"Could not read {self._file_path}: {exc}", backend=_BACKEND
            ) from exc

        self._cache = (signature, state)
        return state

    def _apply_line(self, state: _Replay, line: str, line_number: int) -> None:
        try:
            entry = json.loads(line)
            key = entry["key"]
            op = entry["op"]
            sequence = int(entry["sequence"])
            if op == "put":
                record = AssetRecord.model_validate(entry["record"])
            elif op == "delete":
                record = None
            else:
                raise ValueError(f"unknown op {op!r}")
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.error(
                "store_log_corrupt",
                extra={"path": str(self._file_path), "line": line_number},
            )
            raise StoreFaultError(
                f"Corrupt entry at {self._file_path}:{line_number}: {exc}",
                backend=_BACKEND,
            ) from exc

        if record is not None:
            state.versions.setdefault(key, []).append(record)
            state.current[key] = record
        else:
            state.current.pop(key, None)
        state.last_sequence = max(state.last_sequence, sequence)
