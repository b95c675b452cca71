"""Tests shared by both document store bindings."""

import pytest

from zambaara.core import NotFoundError, StoreError, init_db, make_engine
from zambaara.store import CONTACT, SCORES, InMemoryDocumentStore, SqlDocumentStore
from zambaara.store.base import matches


@pytest.fixture(params=["memory", "sql"])
def doc_store(request):
    if request.param == "memory":
        return InMemoryDocumentStore()
    engine = make_engine("sqlite://")
    init_db(engine)
    return SqlDocumentStore(engine)


def test_create_and_get(doc_store):
    doc_id = doc_store.create(SCORES, {"playerName": "Ana", "value": 12})

    assert doc_store.get(SCORES, doc_id) == {"id": doc_id, "playerName": "Ana", "value": 12}
    assert doc_store.get(SCORES, "missing") is None


def test_collections_are_separate(doc_store):
    doc_id = doc_store.create(SCORES, {"value": 1})
    assert doc_store.get(CONTACT, doc_id) is None
    assert doc_store.query(CONTACT) == []


def test_query_filters_on_equality(doc_store):
    doc_store.create(SCORES, {"gameId": "G1", "value": 1})
    doc_store.create(SCORES, {"gameId": "G2", "value": 2})
    doc_store.create(SCORES, {"gameId": "G1", "value": 3})

    found = doc_store.query(SCORES, {"gameId": "G1"})

    assert sorted(doc["value"] for doc in found) == [1, 3]
    assert len(doc_store.query(SCORES)) == 3


def test_create_with_id_replaces(doc_store):
    doc_store.create(SCORES, {"value": 1, "note": "old"}, doc_id="fixed")
    doc_store.create(SCORES, {"value": 2}, doc_id="fixed")

    assert doc_store.get(SCORES, "fixed") == {"id": "fixed", "value": 2}
    assert len(doc_store.query(SCORES)) == 1


def test_update_merges(doc_store):
    doc_id = doc_store.create(CONTACT, {"name": "Ana", "read": False})

    doc_store.update(CONTACT, doc_id, {"read": True})

    assert doc_store.get(CONTACT, doc_id) == {"id": doc_id, "name": "Ana", "read": True}


def test_update_missing(doc_store):
    with pytest.raises(NotFoundError):
        doc_store.update(CONTACT, "missing", {"read": True})


def test_delete(doc_store):
    doc_id = doc_store.create(SCORES, {"value": 1})

    doc_store.delete(SCORES, doc_id)

    assert doc_store.get(SCORES, doc_id) is None
    with pytest.raises(NotFoundError):
        doc_store.delete(SCORES, doc_id)


def test_ping(doc_store):
    doc_store.ping()


def test_memory_store_hands_out_copies():
    store = InMemoryDocumentStore()
    doc_id = store.create(SCORES, {"tags": ["a"]})

    store.get(SCORES, doc_id)["tags"].append("b")

    assert store.get(SCORES, doc_id)["tags"] == ["a"]


def test_sql_errors_become_store_errors():
    # No init_db: the document table does not exist.
    store = SqlDocumentStore(make_engine("sqlite://"))

    with pytest.raises(StoreError) as exc:
        store.query(SCORES)

    assert exc.value.status_code == 500
    assert "query scores failed" in exc.value.detail


def test_sql_store_persists_to_file(tmp_path):
    url = f"sqlite:///{tmp_path / 'nested' / 'app.db'}"
    engine = make_engine(url)
    init_db(engine)
    SqlDocumentStore(engine).create(SCORES, {"value": 5}, doc_id="s1")

    reopened = SqlDocumentStore(make_engine(url))

    assert reopened.get(SCORES, "s1") == {"id": "s1", "value": 5}


def test_matches():
    assert matches({"a": 1, "b": 2}, {"a": 1})
    assert not matches({"a": 1}, {"a": 2})
    assert matches({"a": 1}, {"c": None, "a": 1})
    assert matches({"a": 1}, None)
