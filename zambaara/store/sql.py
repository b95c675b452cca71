"""Document store persisted in a single SQL table through SQLModel."""

from __future__ import annotations

import json
import uuid
from typing import Any, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import NotFoundError, StoreError
from ..models import StoredDocument
from .base import Document, DocumentStore, matches


def _to_document(row: StoredDocument) -> Document:
    data = json.loads(row.data_json or "{}")
    data["id"] = row.id
    return data


def _dump(data: Mapping[str, Any]) -> str:
    return json.dumps({key: value for key, value in data.items() if key != "id"})


class SqlDocumentStore(DocumentStore):
    """Stores each document as a JSON blob keyed by (collection, id)."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def query(
        self, collection: str, filters: Optional[Mapping[str, Any]] = None
    ) -> List[Document]:
        try:
            with Session(self.engine) as session:
                rows = session.exec(
                    select(StoredDocument).where(StoredDocument.collection == collection)
                ).all()
                docs = [_to_document(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"query {collection} failed: {exc}") from exc
        return [doc for doc in docs if matches(doc, filters)]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredDocument, (collection, doc_id))
                return _to_document(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"get {collection}/{doc_id} failed: {exc}") from exc

    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: Optional[str] = None,
    ) -> str:
        new_id = doc_id or uuid.uuid4().hex
        try:
            with Session(self.engine) as session:
                row = session.get(StoredDocument, (collection, new_id))
                if row:
                    row.data_json = _dump(data)
                else:
                    row = StoredDocument(
                        collection=collection, id=new_id, data_json=_dump(data)
                    )
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"create {collection}/{new_id} failed: {exc}") from exc
        return new_id

    def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredDocument, (collection, doc_id))
                if not row:
                    raise NotFoundError(f"Document {collection}/{doc_id} not found")
                current = json.loads(row.data_json or "{}")
                current.update({key: value for key, value in patch.items() if key != "id"})
                row.data_json = json.dumps(current)
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"update {collection}/{doc_id} failed: {exc}") from exc

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(StoredDocument, (collection, doc_id))
                if not row:
                    raise NotFoundError(f"Document {collection}/{doc_id} not found")
                session.delete(row)
                session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"delete {collection}/{doc_id} failed: {exc}") from exc

    def ping(self) -> None:
        try:
            with Session(self.engine) as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreError(detail=f"ping failed: {exc}") from exc


__all__ = ["SqlDocumentStore"]
