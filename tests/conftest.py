import pytest
from fastapi.testclient import TestClient

from zambaara.app import create_app
from zambaara.core import StoreError
from zambaara.services import AdminAuthConfig
from zambaara.store import SCORES, InMemoryDocumentStore

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "secret"
SESSION_SECRET = "test-session-secret-0123456789"


class RecordingStore(InMemoryDocumentStore):
    """Keeps a log of every store operation issued."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def query(self, collection, filters=None):
        self.calls.append(("query", collection))
        return super().query(collection, filters)

    def get(self, collection, doc_id):
        self.calls.append(("get", collection))
        return super().get(collection, doc_id)

    def create(self, collection, data, doc_id=None):
        self.calls.append(("create", collection))
        return super().create(collection, data, doc_id)


class FailingStore(InMemoryDocumentStore):
    """Raises StoreError for the operations listed in ``fail_on``.

    Operations in ``crash_on`` raise a plain RuntimeError instead.

    ``creates_before_failure`` lets that many creates through, then fails.
    """

    def __init__(self):
        super().__init__()
        self.fail_on = set()
        self.crash_on = set()
        self.creates_before_failure = None

    def _check(self, operation):
        if operation in self.crash_on:
            raise RuntimeError(f"{operation} exploded")
        if operation in self.fail_on:
            raise StoreError(detail=f"{operation} unavailable")

    def query(self, collection, filters=None):
        self._check("query")
        return super().query(collection, filters)

    def get(self, collection, doc_id):
        self._check("get")
        return super().get(collection, doc_id)

    def create(self, collection, data, doc_id=None):
        self._check("create")
        if self.creates_before_failure is not None:
            if self.creates_before_failure <= 0:
                raise StoreError(detail="create unavailable")
            self.creates_before_failure -= 1
        return super().create(collection, data, doc_id)

    def delete(self, collection, doc_id):
        self._check("delete")
        return super().delete(collection, doc_id)

    def ping(self):
        self._check("ping")


@pytest.fixture()
def store():
    return InMemoryDocumentStore()


@pytest.fixture()
def recording_store():
    return RecordingStore()


@pytest.fixture()
def failing_store():
    return FailingStore()


@pytest.fixture()
def auth_config():
    return AdminAuthConfig(
        email=ADMIN_EMAIL,
        password=ADMIN_PASSWORD,
        session_secret=SESSION_SECRET,
    )


@pytest.fixture()
def make_client(auth_config):
    def _make(store, config=None, **client_options):
        app = create_app(store=store, auth_config=config or auth_config)
        return TestClient(app, **client_options)

    return _make


@pytest.fixture()
def client(make_client, store):
    return make_client(store)


@pytest.fixture()
def admin_client(client):
    res = client.post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert res.status_code == 200
    return client


@pytest.fixture()
def add_score():
    def _add(store, participant, value, event_id="E1", game_id="G1", submitted_at=None, **extra):
        data = {
            "participantId": participant,
            "playerName": extra.pop("player_name", participant),
            "eventId": event_id,
            "gameId": game_id,
            "value": value,
            "submittedAt": submitted_at or "2026-01-01T10:00:00Z",
        }
        data.update(extra)
        return store.create(SCORES, data)

    return _add
