"""
Shared fixtures.

Every test gets its own in‑memory MongoDB (``mongomock``) wired into a
fresh application, so no state leaks between tests and no database
server is needed.
"""

from __future__ import annotations

import uuid
from typing import Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

from gridsheets.clients.mongo_client import DocumentStore
from gridsheets.core.config import Settings
from gridsheets.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "mongo_database": f"gridsheets_test_{uuid.uuid4().hex}",
        "mongo_connect_mode": "lazy",
        "jwt_secret": "test-jwt-secret-of-sufficient-length",
        "session_secret": "test-session-secret",
        "index_file": "does/not/exist/index.html",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mongo() -> mongomock.MongoClient:
    return mongomock.MongoClient()


@pytest.fixture
def store(settings: Settings, mongo: mongomock.MongoClient) -> DocumentStore:
    return DocumentStore(settings, client_factory=lambda *args, **kwargs: mongo)


@pytest.fixture
def client(settings: Settings, store: DocumentStore) -> Iterator[TestClient]:
    app = create_app(settings, store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_client(mongo: mongomock.MongoClient) -> Iterator[TestClient]:
    settings = make_settings(auth_strategy="session")
    store = DocumentStore(settings, client_factory=lambda *args, **kwargs: mongo)
    app = create_app(settings, store)
    with TestClient(app) as c:
        yield c
