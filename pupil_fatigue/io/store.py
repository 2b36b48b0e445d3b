# pupil_fatigue/io/store.py
"""
Document store contract and the client context that owns store access.

The store is a key-value document collection per path:

    create(path, record_id, document)   write-once, stamps "timestamp"
    read_all(path)                      every document of the collection
    subscribe(path, callback)           full snapshot now and after each change

Read failures never raise; they degrade to an empty collection so history
views keep rendering. Write failures raise StoreWriteError with the raw
cause attached. Nothing is retried.

Example:
    >>> client = StoreClient(InMemoryDocumentStore())
    >>> cache = RecordCache()
    >>> unsubscribe = client.subscribe_analyses(cache.replace)
    >>> cache.records
    []
"""
from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..config.config import StoreConfig
from ..domain.errors import StoreWriteError
from ..domain.records import AnalysisRecord, EyeTestRecord

Document = Dict[str, Any]
SnapshotCallback = Callable[[List[Document]], None]


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class DocumentStore(ABC):
    """
    Abstract document store with snapshot subscriptions.

    Subclasses only load and persist whole collections; write-once checks,
    server timestamps and subscriber notification live here.
    """

    def __init__(self, clock: Callable[[], int] = _epoch_ms) -> None:
        self.clock = clock
        self._subscribers: Dict[str, List[SnapshotCallback]] = {}

    @abstractmethod
    def _load(self, path: str) -> Dict[str, Document]:
        """Return the collection at ``path`` keyed by record id ({} if missing)."""
        pass

    @abstractmethod
    def _save(self, path: str, collection: Dict[str, Document]) -> None:
        """Persist the whole collection at ``path``."""
        pass

    def create(self, path: str, record_id: str, document: Document) -> Document:
        """
        Write a new document and return it as stored.

        Raises:
            StoreWriteError: if the id already exists or the write fails
        """
        try:
            collection = self._load(path)
            if record_id in collection:
                raise StoreWriteError(f"Record '{record_id}' already exists at '{path}'")
            stored = dict(document)
            stored["timestamp"] = self.clock()
            collection[record_id] = stored
            self._save(path, collection)
        except StoreWriteError:
            raise
        except (OSError, TypeError, ValueError) as e:
            raise StoreWriteError(f"Failed to save record '{record_id}' to '{path}'", detail=e) from e

        self._notify(path)
        return stored

    def read_all(self, path: str) -> List[Document]:
        """All documents at ``path``; [] if the collection is missing or unreadable."""
        try:
            collection = self._load(path)
        except (OSError, ValueError) as e:
            print(f"Warning: could not read '{path}': {e}")
            return []
        return [{"id": record_id, **doc} for record_id, doc in collection.items()]

    def subscribe(self, path: str, callback: SnapshotCallback) -> Callable[[], None]:
        """
        Deliver the full collection now and after every change.

        Returns:
            Function that cancels the subscription
        """
        self._subscribers.setdefault(path, []).append(callback)
        callback(self.read_all(path))

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(path, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def _notify(self, path: str) -> None:
        callbacks = list(self._subscribers.get(path, []))
        if not callbacks:
            return
        snapshot = self.read_all(path)
        for callback in callbacks:
            try:
                callback(list(snapshot))
            except Exception as e:
                print(f"Warning: subscriber {getattr(callback, '__name__', callback)} failed: {e}")


class InMemoryDocumentStore(DocumentStore):
    """Collections kept in a dict; documents are JSON round-tripped on write."""

    def __init__(self, clock: Callable[[], int] = _epoch_ms) -> None:
        super().__init__(clock)
        self._collections: Dict[str, str] = {}

    def _load(self, path: str) -> Dict[str, Document]:
        raw = self._collections.get(path)
        return json.loads(raw) if raw else {}

    def _save(self, path: str, collection: Dict[str, Document]) -> None:
        self._collections[path] = json.dumps(collection, ensure_ascii=False)


class JsonFileDocumentStore(DocumentStore):
    """
    One JSON file per collection below ``root_dir``.

    Path ``users/u1/analyses`` is stored as ``<root_dir>/users/u1/analyses.json``.
    """

    def __init__(self, root_dir: str, clock: Callable[[], int] = _epoch_ms) -> None:
        super().__init__(clock)
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _file(self, path: str) -> Path:
        return self.root_dir / f"{path.strip('/')}.json"

    def _load(self, path: str) -> Dict[str, Document]:
        file = self._file(path)
        if not file.exists():
            return {}
        with open(file, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, path: str, collection: Dict[str, Document]) -> None:
        file = self._file(path)
        file.parent.mkdir(parents=True, exist_ok=True)
        with open(file, "w", encoding="utf-8") as f:
            json.dump(collection, f, indent=2, ensure_ascii=False)


class AnonymousIdentity:
    """Stub authentication: always signs in as the demo user."""

    def __init__(self, uid: str = StoreConfig.user_id) -> None:
        self.uid = uid

    def sign_in(self) -> str:
        return self.uid


class RecordCache:
    """
    Client-side copy of a collection fed by subscription snapshots.

    Each snapshot replaces the cached collection; nothing is merged.
    """

    def __init__(self) -> None:
        self.records: List[Document] = []
        self.updates = 0

    def replace(self, snapshot: List[Document]) -> None:
        self.records = list(snapshot)
        self.updates += 1

    @property
    def latest(self) -> Optional[Document]:
        if not self.records:
            return None
        return max(self.records, key=lambda doc: doc.get("timestamp") or 0)


class StoreClient:
    """
    Explicit client context: store, identity and collection layout.

    Build one at start-up and pass it to every component that needs store
    access.
    """

    def __init__(
        self,
        store: DocumentStore,
        config: Optional[StoreConfig] = None,
        identity: Optional[AnonymousIdentity] = None,
    ) -> None:
        self.store = store
        self.config = config or StoreConfig()
        self.identity = identity or AnonymousIdentity(self.config.user_id)
        self.uid = self.identity.sign_in()

    @classmethod
    def from_config(cls, config: StoreConfig) -> StoreClient:
        store = JsonFileDocumentStore(config.store_dir) if config.store_dir else InMemoryDocumentStore()
        return cls(store, config)

    @property
    def analyses_path(self) -> str:
        return self.config.analyses_path_template.format(uid=self.uid)

    @property
    def eye_tests_path(self) -> str:
        return self.config.eye_tests_path_template.format(uid=self.uid)

    def save_analysis(self, record: AnalysisRecord) -> Document:
        return self.store.create(self.analyses_path, record.id, record.to_document())

    def save_eye_test(self, record: EyeTestRecord) -> Document:
        return self.store.create(self.eye_tests_path, record.id, record.to_document())

    def analyses(self) -> List[Document]:
        return self.store.read_all(self.analyses_path)

    def eye_tests(self) -> List[Document]:
        return self.store.read_all(self.eye_tests_path)

    def subscribe_analyses(self, callback: SnapshotCallback) -> Callable[[], None]:
        return self.store.subscribe(self.analyses_path, callback)

    def subscribe_eye_tests(self, callback: SnapshotCallback) -> Callable[[], None]:
        return self.store.subscribe(self.eye_tests_path, callback)
