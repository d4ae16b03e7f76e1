# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for the VersionedStore backends — MemoryVersionedStore and
FileVersionedStore.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from asset_lineage.config import StoreConfig
from asset_lineage.errors import ConfigurationError, RecordNotFoundError, StoreFaultError
from asset_lineage.storage.file import FileVersionedStore
from asset_lineage.storage.interface import VersionedStore
from asset_lineage.storage.memory import MemoryVersionedStore


@pytest.fixture(params=["memory", "file"])
def any_store(request: pytest.FixtureRequest, tmp_path: Path) -> VersionedStore:
    """Each contract test runs once per backend."""
    if request.param == "memory":
        return MemoryVersionedStore()
    return FileVersionedStore(tmp_path / "store.ndjson")


# ---------------------------------------------------------------------------
# TestVersionedStoreContract
# ---------------------------------------------------------------------------


class TestVersionedStoreContract:
    async def test_get_returns_latest_put(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.put("X1", make_record("X1", "c2", previous_commit_id="c1"))
        current = await any_store.get("X1")
        assert current.commit_id == "c2"

    async def test_get_unknown_key_raises_record_not_found(self, any_store) -> None:
        with pytest.raises(RecordNotFoundError):
            await any_store.get("missing")

    async def test_put_returns_increasing_sequence_numbers(self, any_store, make_record) -> None:
        first = await any_store.put("A", make_record("A", "c1"))
        second = await any_store.put("B", make_record("B", "c2"))
        third = await any_store.put("A", make_record("A", "c3", previous_commit_id="c1"))
        assert first < second < third

    async def test_exists_tracks_put_and_delete(self, any_store, make_record) -> None:
        assert await any_store.exists("X1") is False
        await any_store.put("X1", make_record("X1", "c1"))
        assert await any_store.exists("X1") is True
        await any_store.delete("X1")
        assert await any_store.exists("X1") is False

    async def test_delete_unknown_key_raises_record_not_found(self, any_store) -> None:
        with pytest.raises(RecordNotFoundError):
            await any_store.delete("missing")

    async def test_delete_twice_raises_on_second_call(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.delete("X1")
        with pytest.raises(RecordNotFoundError):
            await any_store.delete("X1")

    async def test_get_after_delete_raises(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.delete("X1")
        with pytest.raises(RecordNotFoundError):
            await any_store.get("X1")

    async def test_history_is_newest_first(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.put("X1", make_record("X1", "c2", previous_commit_id="c1"))
        await any_store.put("X1", make_record("X1", "c3", previous_commit_id="c2"))
        commits = [record.commit_id async for record in any_store.history("X1")]
        assert commits == ["c3", "c2", "c1"]

    async def test_history_survives_delete(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.put("X1", make_record("X1", "c2", previous_commit_id="c1"))
        await any_store.delete("X1")
        commits = [record.commit_id async for record in any_store.history("X1")]
        assert commits == ["c2", "c1"]

    async def test_history_continues_after_rewrite_of_deleted_key(self, any_store, make_record) -> None:
        await any_store.put("X1", make_record("X1", "c1"))
        await any_store.delete("X1")
        await any_store.put("X1", make_record("X1", "c2"))
        commits = [record.commit_id async for record in any_store.history("X1")]
        assert commits == ["c2", "c1"]
        assert (await any_store.get("X1")).commit_id == "c2"

    async def test_history_of_unknown_key_is_empty(self, any_store) -> None:
        assert [record async for record in any_store.history("missing")] == []

    async def test_history_is_per_key(self, any_store, make_record) -> None:
        await any_store.put("A", make_record("A", "a1"))
        await any_store.put("B", make_record("B", "b1"))
        commits = [record.commit_id async for record in any_store.history("A")]
        assert commits == ["a1"]

    async def test_scan_all_yields_live_keys_in_key_order(self, any_store, make_record) -> None:
        await any_store.put("b", make_record("b", "c1"))
        await any_store.put("a", make_record("a", "c2"))
        await any_store.put("c", make_record("c", "c3"))
        await any_store.delete("c")
        keys = [key async for key, _record in any_store.scan_all()]
        assert keys == ["a", "b"]

    async def test_scan_all_yields_current_values(self, any_store, make_record) -> None:
        await any_store.put("a", make_record("a", "c1"))
        await any_store.put("a", make_record("a", "c2", previous_commit_id="c1"))
        pairs = [(key, record.commit_id) async for key, record in any_store.scan_all()]
        assert pairs == [("a", "c2")]


# ---------------------------------------------------------------------------
# TestMemoryVersionedStore
# ---------------------------------------------------------------------------


class TestMemoryVersionedStore:
    async def test_history_snapshot_ignores_later_writes(self, make_record) -> None:
        store = MemoryVersionedStore()
        await store.put("X1", make_record("X1", "c1"))
        iterator = store.history("X1")
        first = await iterator.__anext__()
        await store.put("X1", make_record("X1", "c2", previous_commit_id="c1"))
        remaining = [record async for record in iterator]
        assert first.commit_id == "c1"
        assert remaining == []


# ---------------------------------------------------------------------------
# TestFileVersionedStore
# ---------------------------------------------------------------------------


class TestFileVersionedStore:
    async def test_state_persists_across_instances(self, tmp_path: Path, make_record) -> None:
        path = tmp_path / "store.ndjson"
        writer = FileVersionedStore(path)
        await writer.put("X1", make_record("X1", "c1"))
        await writer.put("X1", make_record("X1", "c2", previous_commit_id="c1"))
        await writer.delete("X1")

        reader = FileVersionedStore(path)
        assert await reader.exists("X1") is False
        commits = [record.commit_id async for record in reader.history("X1")]
        assert commits == ["c2", "c1"]

    async def test_log_is_one_json_object_per_line(self, tmp_path: Path, make_record) -> None:
        path = tmp_path / "store.ndjson"
        store = FileVersionedStore(path)
        await store.put("X1", make_record("X1", "c1"))
        await store.delete("X1")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].startswith('{"key":"X1","op":"put"')
        assert '"op":"delete"' in lines[1]

    async def test_corrupt_line_raises_store_fault(self, tmp_path: Path, make_record) -> None:
        path = tmp_path / "store.ndjson"
        store = FileVersionedStore(path)
        await store.put("X1", make_record("X1", "c1"))
        with open(path, "a", encoding="utf-8") as file_handle:
            file_handle.write("{not json\n")
        with pytest.raises(StoreFaultError) as exc_info:
            await store.get("X1")
        assert exc_info.value.code == "STORE_FAULT"
        assert ":2" in exc_info.value.message

    async def test_unknown_op_raises_store_fault(self, tmp_path: Path) -> None:
        path = tmp_path / "store.ndjson"
        path.write_text('{"key":"X1","op":"rename","record":null,"sequence":1}\n', encoding="utf-8")
        store = FileVersionedStore(path)
        with pytest.raises(StoreFaultError):
            await store.exists("X1")

    async def test_blank_lines_are_ignored(self, tmp_path: Path, make_record) -> None:
        path = tmp_path / "store.ndjson"
        store = FileVersionedStore(path)
        await store.put("X1", make_record("X1", "c1"))
        with open(path, "a", encoding="utf-8") as file_handle:
            file_handle.write("\n\n")
        assert (await store.get("X1")).commit_id == "c1"

    async def test_sequence_resumes_from_existing_log(self, tmp_path: Path, make_record) -> None:
        path = tmp_path / "store.ndjson"
        first = await FileVersionedStore(path).put("X1", make_record("X1", "c1"))
        second = await FileVersionedStore(path).put("X1", make_record("X1", "c2"))
        assert second == first + 1

    async def test_fsync_writes_are_readable(self, tmp_path: Path, make_record) -> None:
        store = FileVersionedStore(tmp_path / "store.ndjson", StoreConfig(fsync=True))
        await store.put("X1", make_record("X1", "c1"))
        assert (await store.get("X1")).commit_id == "c1"

    def test_directory_path_raises_configuration_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            FileVersionedStore(tmp_path)

    async def test_missing_file_reads_as_empty_store(self, tmp_path: Path) -> None:
        store = FileVersionedStore(tmp_path / "absent.ndjson")
        assert await store.exists("X1") is False
        assert [pair async for pair in store.scan_all()] == []

    async def test_concurrent_puts_get_distinct_sequences(self, tmp_path: Path, make_record) -> None:
        store = FileVersionedStore(tmp_path / "store.ndjson")
        sequences = await asyncio.gather(
            *(store.put(key, make_record(key, f"c{key}")) for key in "ABCD")
        )
        assert sorted(sequences) == [1, 2, 3, 4]
        keys = [key async for key, _record in store.scan_all()]
        assert keys == ["A", "B", "C", "D"]

    async def test_concurrent_deletes_and_puts_keep_sequence_unique(
        self, tmp_path: Path, make_record
    ) -> None:
        path = tmp_path / "store.ndjson"
        store = FileVersionedStore(path)
        for key in "AB":
            await store.put(key, make_record(key, f"c{key}"))
        await asyncio.gather(
            store.delete("A"),
            store.delete("B"),
            store.put("C", make_record("C", "cC")),
        )
        lines = path.read_text(encoding="utf-8").splitlines()
        sequences = [int(line.split('"sequence":')[1].rstrip("}")) for line in lines]
        assert sorted(sequences) == [1, 2, 3, 4, 5]

    async def test_replayed_state_is_reused_until_file_changes(
        self, tmp_path: Path, make_record, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "store.ndjson"
        store = FileVersionedStore(path)
        await store.put("X1", make_record("X1", "c1"))
        await store.put("X1", make_record("X1", "c2", previous_commit_id="c1"))

        parsed: list[int] = []
        original = store._apply_line

        def counting_apply_line(state, line, line_number):
            parsed.append(line_number)
            original(state, line, line_number)

        monkeypatch.setattr(store, "_apply_line", counting_apply_line)

        await store.get("X1")
        await store.exists("X1")
        assert [record.commit_id async for record in store.history("X1")] == ["c2", "c1"]
        assert parsed == [1, 2]

        await FileVersionedStore(path).put("X1", make_record("X1", "c3", previous_commit_id="c2"))
        assert (await store.get("X1")).commit_id == "c3"
        assert parsed == [1, 2, 1, 2, 3]
