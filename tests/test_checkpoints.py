"""Tests for checkpoint models and the checkpoint store."""

import json
from datetime import datetime, timezone

import pytest

from bulksum.config import Config
from bulksum.errors import CheckpointError, InvalidTransition, PersistenceError
from bulksum.models import Checkpoint, ItemRecord, ItemStatus
from bulksum.storage import CHECKPOINT_FILENAME, CheckpointStore, atomic_write_text

from .helpers import make_item


def new_checkpoint() -> Checkpoint:
    return Checkpoint(source_id="s1", source_name="Source One", source_url="https://example.com")


class TestItemRecordTransitions:
    def test_pending_to_summarized(self) -> None:
        record = ItemRecord(title="t", url="u", error="old")
        when = datetime(2024, 1, 2, tzinfo=timezone.utc)
        record.mark_summarized(when)
        assert record.status == ItemStatus.SUMMARIZED
        assert record.processed_at == when
        assert record.error is None

    def test_summarized_sets_timestamp_by_default(self) -> None:
        record = ItemRecord(title="t", url="u")
        record.mark_summarized()
        assert record.processed_at is not None

    def test_pending_to_error_keeps_full_detail(self) -> None:
        record = ItemRecord(title="t", url="u")
        detail = "x" * 500
        record.mark_error(detail)
        assert record.status == ItemStatus.ERROR
        assert record.error == detail

    def test_error_requeue(self) -> None:
        record = ItemRecord(title="t", url="u")
        record.mark_error("bad")
        record.requeue()
        assert record.status == ItemStatus.PENDING
        assert record.error is None

    def test_summarized_is_terminal(self) -> None:
        record = ItemRecord(title="t", url="u")
        record.mark_summarized()
        with pytest.raises(InvalidTransition):
            record.mark_error("late failure")
        with pytest.raises(InvalidTransition):
            record.requeue()
        with pytest.raises(InvalidTransition):
            record.mark_summarized()
        assert record.status == ItemStatus.SUMMARIZED

    def test_pending_cannot_be_requeued(self) -> None:
        with pytest.raises(InvalidTransition):
            ItemRecord(title="t", url="u").requeue()


class TestCheckpoint:
    def test_add_discovered_inserts_pending(self) -> None:
        checkpoint = new_checkpoint()
        added = checkpoint.add_discovered([make_item("a"), make_item("b")])
        assert added == ["a", "b"]
        assert all(r.status == ItemStatus.PENDING for r in checkpoint.items.values())

    def test_add_discovered_never_overwrites(self) -> None:
        checkpoint = new_checkpoint()
        checkpoint.add_discovered([make_item("a", "Original")])
        checkpoint.items["a"].mark_summarized()

        added = checkpoint.add_discovered([make_item("a", "Renamed upstream"), make_item("b")])

        assert added == ["b"]
        assert checkpoint.items["a"].title == "Original"
        assert checkpoint.items["a"].status == ItemStatus.SUMMARIZED

    def test_pending_items_in_stored_order_with_limit(self) -> None:
        checkpoint = new_checkpoint()
        checkpoint.add_discovered([make_item(i) for i in ("c", "a", "b", "d")])
        checkpoint.items["a"].mark_summarized()

        assert [i.id for i in checkpoint.pending_items()] == ["c", "b", "d"]
        assert [i.id for i in checkpoint.pending_items(2)] == ["c", "b"]
        assert checkpoint.pending_items(0) == []

    def test_requeue_errors(self) -> None:
        checkpoint = new_checkpoint()
        checkpoint.add_discovered([make_item("a"), make_item("b"), make_item("c")])
        checkpoint.items["a"].mark_error("x")
        checkpoint.items["b"].mark_summarized()

        assert checkpoint.requeue_errors() == 1
        assert checkpoint.count(ItemStatus.PENDING) == 2
        assert checkpoint.count(ItemStatus.SUMMARIZED) == 1


class TestCheckpointStore:
    def test_load_absent_returns_empty_and_creates_dir(self, config: Config) -> None:
        store = CheckpointStore(config)
        source = config.config.sources[0]

        checkpoint = store.load(source)

        assert checkpoint.source_id == "s1"
        assert checkpoint.source_name == "Source One"
        assert checkpoint.items == {}
        assert checkpoint.last_scanned is None
        assert config.get_source_dir("s1").is_dir()
        assert not store.exists("s1")

    def test_save_then_load_preserves_records(self, config: Config) -> None:
        store = CheckpointStore(config)
        source = config.config.sources[0]
        checkpoint = store.load(source)
        checkpoint.add_discovered([make_item("a"), make_item("b")])
        checkpoint.items["a"].mark_summarized()
        checkpoint.items["b"].mark_error("provider failed")
        store.save(checkpoint)

        loaded = store.load(source)

        assert store.exists("s1")
        assert loaded.items["a"].status == ItemStatus.SUMMARIZED
        assert loaded.items["a"].processed_at is not None
        assert loaded.items["b"].error == "provider failed"
        assert list(loaded.items) == ["a", "b"]

    def test_save_writes_json_without_temp_leftovers(self, config: Config) -> None:
        store = CheckpointStore(config)
        checkpoint = store.load(config.config.sources[0])
        checkpoint.add_discovered([make_item("a")])
        store.save(checkpoint)

        source_dir = config.get_source_dir("s1")
        assert [p.name for p in source_dir.iterdir()] == [CHECKPOINT_FILENAME]
        data = json.loads((source_dir / CHECKPOINT_FILENAME).read_text())
        assert data["items"]["a"]["status"] == "pending"

    def test_malformed_checkpoint_fails_loudly(self, config: Config) -> None:
        store = CheckpointStore(config)
        path = store.path("s1")
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CheckpointError):
            store.load(config.config.sources[0])

    def test_schema_invalid_checkpoint_fails_loudly(self, config: Config) -> None:
        store = CheckpointStore(config)
        path = store.path("s1")
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"source_id": "s1", "items": {"a": {"status": "weird"}}}))

        with pytest.raises(CheckpointError):
            store.load(config.config.sources[0])

    def test_reset_clears_records_and_keeps_identity(self, config: Config) -> None:
        store = CheckpointStore(config)
        source = config.config.sources[0]
        checkpoint = store.load(source)
        checkpoint.add_discovered([make_item("a")])
        checkpoint.last_scanned = datetime.now(timezone.utc)
        store.save(checkpoint)

        store.reset(source)
        loaded = store.load(source)

        assert loaded.items == {}
        assert loaded.last_scanned is None
        assert loaded.source_id == "s1"
        assert loaded.source_name == "Source One"

    def test_reset_keeps_persisted_identity(self, config: Config) -> None:
        store = CheckpointStore(config)
        source = config.config.sources[0]
        checkpoint = store.load(source)
        checkpoint.source_name = "Renamed Since"
        checkpoint.add_discovered([make_item("a")])
        store.save(checkpoint)

        reset = store.reset(source)

        assert reset.items == {}
        assert store.load(source).source_name == "Renamed Since"

    def test_reset_recovers_malformed_checkpoint(self, config: Config) -> None:
        store = CheckpointStore(config)
        path = store.path("s1")
        path.parent.mkdir(parents=True)
        path.write_text("garbage", encoding="utf-8")

        store.reset(config.config.sources[0])

        assert store.load(config.config.sources[0]).items == {}


class TestAtomicWrite:
    def test_failure_keeps_previous_content(self, tmp_path, monkeypatch) -> None:
        target = tmp_path / "file.json"
        target.write_text("old", encoding="utf-8")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("bulksum.storage.files.os.replace", broken_replace)

        with pytest.raises(PersistenceError):
            atomic_write_text(target, "new")

        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]
