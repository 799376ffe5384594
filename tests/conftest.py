# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from core.errors import DocumentNotFound, SessionNotFound
from dependencies.stores import get_document_store, get_file_store, get_session_store
from models.auth import Principal, Session


TEST_TOKEN = "test-token"


def make_principal(user_id="user-1", email="staff@example.com", role=None, name="Staff Member"):
    preferences = {"role": role} if role else {}
    return Principal(id=user_id, email=email, name=name, preferences=preferences)


class FakeDocumentStore:
    """In-memory stand-in for the Supabase table adapter."""

    def __init__(self):
        self.tables = {}
        self.fail_with = None

    def add(self, collection, row):
        self.tables.setdefault(collection, []).append(dict(row))

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_document(self, collection, document_id):
        self._check()
        for row in self.tables.get(collection, []):
            if row.get("id") == document_id:
                return dict(row)
        raise DocumentNotFound(f"{collection}/{document_id} not found")

    def list_documents(self, collection, filters=None):
        self._check()
        rows = [dict(r) for r in self.tables.get(collection, [])]
        for f in filters or []:
            if f.op == "order_desc":
                rows.sort(key=lambda r: r.get(f.field) or "", reverse=True)
            elif f.op == "limit":
                rows = rows[: f.value]
        return rows

    def create_document(self, collection, document_id, fields):
        self._check()
        row = {**fields, "id": document_id}
        self.add(collection, row)
        return dict(row)

    def update_document(self, collection, document_id, fields):
        self._check()
        for row in self.tables.get(collection, []):
            if row.get("id") == document_id:
                row.update(fields)
                return dict(row)
        raise DocumentNotFound(f"{collection}/{document_id} not found")

    def delete_document(self, collection, document_id):
        self._check()
        rows = self.tables.get(collection, [])
        self.tables[collection] = [r for r in rows if r.get("id") != document_id]


@pytest.fixture
def document_store():
    return FakeDocumentStore()


@pytest.fixture
def session_store():
    """Mock session store with no active session."""
    store = Mock()
    store.get_current_session.side_effect = SessionNotFound("No session")
    return store


@pytest.fixture
def file_store():
    store = Mock()
    store.get_file_view_url.side_effect = lambda bucket, file_id: f"https://files.test/{bucket}/{file_id}"
    store.list_files.return_value = []
    return store


@pytest.fixture
def sign_in(session_store):
    """
    Make TEST_TOKEN resolve to the given principal, for both
    request-time session checks and login().
    """

    def _sign_in(principal, token=TEST_TOKEN):
        def current(t):
            if t == token:
                return principal
            raise SessionNotFound("Invalid or expired session")

        session_store.get_current_session.side_effect = current
        session_store.create_session.side_effect = None
        session_store.create_session.return_value = Session(id=token, principal=principal)
        return {"Authorization": f"Bearer {token}"}

    return _sign_in


@pytest.fixture(scope="function")
def app(session_store, document_store, file_store):
    """Create a test FastAPI application instance with fake stores."""
    application = create_app()
    application.dependency_overrides[get_session_store] = lambda: session_store
    application.dependency_overrides[get_document_store] = lambda: document_store
    application.dependency_overrides[get_file_store] = lambda: file_store
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
