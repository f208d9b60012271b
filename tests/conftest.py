# tests/conftest.py
import copy
import itertools

import pytest
from fastapi.testclient import TestClient

from headless_api.config.settings import settings
from headless_api.core.email import EmailBackend, EmailService, get_email_service
from headless_api.database.supabase_client import get_supabase
from headless_api.main import app

BASE_URL = "https://testserver"  # session cookie is Secure


class StorageUnavailable(Exception):
    pass


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """The slice of the PostgREST query builder the application uses."""

    def __init__(self, store, table):
        self.store = store
        self.table = table
        self.action = "select"
        self.columns = None
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.order_by = None
        self.row_limit = None

    def select(self, columns="*"):
        self.action = "select"
        if columns.strip() != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        return self

    def insert(self, rows):
        self.action, self.payload = "insert", rows
        return self

    def upsert(self, rows, on_conflict=None):
        self.action, self.payload, self.on_conflict = "upsert", rows, on_conflict
        return self

    def update(self, values):
        self.action, self.payload = "update", values
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def _matching(self):
        return [row for row in self.store.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self):
        if self.table in self.store.failing:
            raise StorageUnavailable(f"table {self.table} unavailable")

        rows = self.store.rows(self.table)
        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [self.store.new_row(self.table, r) for r in payload]
            rows.extend(inserted)
            return FakeResponse(copy.deepcopy(inserted))

        if self.action == "upsert":
            new = self.payload
            for row in rows:
                if row.get(self.on_conflict) == new.get(self.on_conflict):
                    row.update(copy.deepcopy(new))
                    return FakeResponse([copy.deepcopy(row)])
            row = self.store.new_row(self.table, new)
            rows.append(row)
            return FakeResponse([copy.deepcopy(row)])

        matched = self._matching()
        if self.action == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResponse(copy.deepcopy(matched))

        if self.action == "delete":
            self.store.tables[self.table] = [r for r in rows if r not in matched]
            return FakeResponse(copy.deepcopy(matched))

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self.row_limit is not None:
            matched = matched[:self.row_limit]
        if self.columns:
            matched = [{c: r.get(c) for c in self.columns} for r in matched]
        return FakeResponse(copy.deepcopy(matched))


class FakeSupabase:
    """In-memory table store standing in for the supabase client."""

    def __init__(self):
        self.tables = {}
        self.failing = set()
        self._ids = itertools.count(1)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def new_row(self, table, values):
        row = copy.deepcopy(values)
        if row.get("id") is None:
            row["id"] = next(self._ids)
        return row

    def table(self, name):
        return FakeQuery(self, name)


class RecordingEmailBackend(EmailBackend):
    def __init__(self):
        self.sent = []

    async def send_email(self, to, subject, body, from_address, from_name):
        self.sent.append({"to": to, "subject": subject, "body": body})
        return True


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest.fixture
def store():
    return FakeSupabase()


@pytest.fixture
def outbox():
    return RecordingEmailBackend()


@pytest.fixture
def client(store, outbox):
    app.dependency_overrides[get_supabase] = lambda: store
    app.dependency_overrides[get_email_service] = lambda: EmailService(backend=outbox)
    with TestClient(app, base_url=BASE_URL) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def new_client(client):
    """Extra independent browsers sharing the same app and store"""
    opened = []

    def _open():
        c = TestClient(app, base_url=BASE_URL)
        opened.append(c)
        return c

    yield _open
    for c in opened:
        c.close()


def register_and_login(client, username="alice", email="alice@example.com", password="s3cret-pass"):
    r = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def admin(client):
    """Logged-in admin client"""
    register_and_login(client)
    return client


@pytest.fixture
def tenant(admin):
    """A freshly created service: {"service_id", "api_key", "headers"}"""
    r = admin.post("/api/service", json={"name": "Blog"})
    assert r.status_code == 201, r.text
    body = r.json()
    body["headers"] = {"x-api-key": body["api_key"]}
    return body
