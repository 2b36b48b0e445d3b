import json

import pytest

from pupil_fatigue.config import StoreConfig
from pupil_fatigue.domain import StoreWriteError
from pupil_fatigue.io.store import (
    AnonymousIdentity,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    RecordCache,
    StoreClient,
)


def test_create_stamps_timestamp_and_reads_back(store):
    stored = store.create("users/u/analyses", "1", {"id": "1", "date": "2025-03-14"})
    assert stored["timestamp"] == 1000
    assert store.read_all("users/u/analyses") == [{"id": "1", "date": "2025-03-14", "timestamp": 1000}]


def test_write_once(store):
    store.create("p", "1", {"a": 1})
    with pytest.raises(StoreWriteError, match="already exists"):
        store.create("p", "1", {"a": 2})
    assert store.read_all("p")[0]["a"] == 1


def test_missing_collection_reads_empty(store):
    assert store.read_all("nothing/here") == []


def test_unserializable_document_raises_store_error(store):
    with pytest.raises(StoreWriteError) as excinfo:
        store.create("p", "1", {"bad": object()})
    assert isinstance(excinfo.value.detail, TypeError)
    assert "TypeError" in str(excinfo.value)
    assert store.read_all("p") == []


def test_subscribe_delivers_snapshots(store):
    snapshots = []
    unsubscribe = store.subscribe("p", snapshots.append)
    assert snapshots == [[]]

    store.create("p", "1", {"v": 1})
    store.create("other", "9", {"v": 9})
    store.create("p", "2", {"v": 2})
    assert [len(s) for s in snapshots] == [0, 1, 2]

    unsubscribe()
    store.create("p", "3", {"v": 3})
    assert len(snapshots) == 3


def test_failing_subscriber_does_not_break_write(store, capsys):
    def broken(snapshot):
        if snapshot:
            raise RuntimeError("boom")

    store.subscribe("p", broken)
    store.create("p", "1", {"v": 1})
    assert "boom" in capsys.readouterr().out
    assert len(store.read_all("p")) == 1


def test_record_cache_replaces(store):
    cache = RecordCache()
    store.subscribe("p", cache.replace)
    store.create("p", "1", {"v": 1})
    store.create("p", "2", {"v": 2})
    assert [doc["id"] for doc in cache.records] == ["1", "2"]
    assert cache.latest["id"] == "2"
    cache.replace([])
    assert cache.records == []
    assert cache.latest is None


def test_json_file_store(tmp_path):
    store = JsonFileDocumentStore(str(tmp_path), clock=lambda: 42)
    store.create("users/u1/analyses", "1", {"summary": "Ünïcode"})

    file = tmp_path / "users" / "u1" / "analyses.json"
    data = json.loads(file.read_text(encoding="utf-8"))
    assert data == {"1": {"summary": "Ünïcode", "timestamp": 42}}

    reopened = JsonFileDocumentStore(str(tmp_path))
    assert reopened.read_all("users/u1/analyses") == [{"id": "1", "summary": "Ünïcode", "timestamp": 42}]


def test_json_file_store_corrupt_file_reads_empty(tmp_path, capsys):
    store = JsonFileDocumentStore(str(tmp_path))
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert store.read_all("broken") == []
    assert "Warning" in capsys.readouterr().out


def test_json_file_store_write_failure(tmp_path):
    store = JsonFileDocumentStore(str(tmp_path))
    # A directory where the collection file should be
    (tmp_path / "blocked.json").mkdir()
    with pytest.raises(StoreWriteError):
        store.create("blocked", "1", {"v": 1})


def test_client_paths():
    client = StoreClient(InMemoryDocumentStore())
    assert client.uid == "demo-user-12345"
    assert client.analyses_path == "users/demo-user-12345/analyses"
    assert client.eye_tests_path == "eye-test/demo-user-12345"


def test_client_custom_identity():
    client = StoreClient(InMemoryDocumentStore(), StoreConfig(user_id="alice"), AnonymousIdentity("bob"))
    assert client.uid == "bob"
    assert client.analyses_path == "users/bob/analyses"


def test_client_from_config(tmp_path):
    assert isinstance(StoreClient.from_config(StoreConfig()).store, InMemoryDocumentStore)
    client = StoreClient.from_config(StoreConfig(store_dir=str(tmp_path), user_id="u9"))
    assert isinstance(client.store, JsonFileDocumentStore)
    assert client.uid == "u9"


def test_client_subscriptions(client):
    cache = RecordCache()
    client.subscribe_eye_tests(cache.replace)
    client.store.create(client.eye_tests_path, "5", {"testType": "blink_test"})
    assert cache.records[0]["testType"] == "blink_test"
    assert client.analyses() == []
