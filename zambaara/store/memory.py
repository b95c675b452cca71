"""In-process document store used by tests and local development."""

from __future__ import annotations

import copy
import threading
import uuid
from typing import Any, Dict, List, Mapping, Optional

from ..core.errors import NotFoundError
from .base import Document, DocumentStore, matches


class InMemoryDocumentStore(DocumentStore):
    """Dict-of-dicts store; documents are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Document]] = {}
        self._lock = threading.Lock()

    def query(
        self, collection: str, filters: Optional[Mapping[str, Any]] = None
    ) -> List[Document]:
        with self._lock:
            docs = self._collections.get(collection, {})
            return [
                {**copy.deepcopy(data), "id": doc_id}
                for doc_id, data in docs.items()
                if matches(data, filters)
            ]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return None
            return {**copy.deepcopy(data), "id": doc_id}

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: Optional[str] = None,
    ) -> str:
        new_id = doc_id or uuid.uuid4().hex
        stored = {key: copy.deepcopy(value) for key, value in data.items() if key != "id"}
        with self._lock:
            self._collections.setdefault(collection, {})[new_id] = stored
        return new_id

    def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        with self._lock:
            current = self._collections.get(collection, {}).get(doc_id)
            if current is None:
                raise NotFoundError(f"Document {collection}/{doc_id} not found")
            for key, value in patch.items():
                if key != "id":
                    current[key] = copy.deepcopy(value)

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._collections.get(collection, {})
            if doc_id not in docs:
                raise NotFoundError(f"Document {collection}/{doc_id} not found")
            del docs[doc_id]

    def ping(self) -> None:
        return None


__all__ = ["InMemoryDocumentStore"]
