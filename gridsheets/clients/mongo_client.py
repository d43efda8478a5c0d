"""
clients/mongo_client.py
-----------------------

Document store wrapper around ``pymongo``.  One instance is created
per process in the FastAPI lifespan event and handed to services via
dependency injection, exactly like any other shared client.

Two connection modes are supported (see :mod:`gridsheets.core.config`):

``eager``
    :meth:`DocumentStore.connect` is called at startup and pings the
    server.  If the store cannot be reached within the server selection
    timeout, startup fails and the process exits non‑zero.
``lazy``
    The connection is opened on first use of any collection.  This suits
    serverless deployments where the process may be frozen between
    requests.

Nothing here retries; a failing operation raises ``PyMongoError`` and
the calling service decides what to report.
"""

from __future__ import annotations

import json
import threading
from typing import Any, Callable, Optional

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from gridsheets.core.config import Settings, get_settings
from gridsheets.logging_config import logger

USERS = "users"
METADATA = "metadata"
TABLES = "tables"

ClientFactory = Callable[..., Any]


class DocumentStore:
    """Lazily connected handle on the service database.

    ``client_factory`` defaults to :class:`pymongo.MongoClient`; tests
    pass ``mongomock.MongoClient`` instead.
    """

    def __init__(self, settings: Optional[Settings] = None, client_factory: ClientFactory = MongoClient) -> None:
        self.settings = settings or get_settings()
        self._client_factory = client_factory
        self._client: Any = None
        self._db: Optional[Database] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def connect(self, ping: bool = False) -> Database:
        """Open the connection if needed and return the database.

        With ``ping=True`` the server is contacted immediately so that
        connectivity problems surface here rather than on the first
        query.
        """
        with self._lock:
            if self._db is None:
                client = self._client_factory(
                    self.settings.mongo_uri,
                    serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
                )
                db = client[self.settings.mongo_database]
                if ping:
                    client.admin.command("ping")
                db[USERS].create_index([("username", ASCENDING)], unique=True)
                db[TABLES].create_index([("collectionName", ASCENDING)], unique=True)
                self._client = client
                self._db = db
                logger.info(json.dumps({
                    "event": "store_connected",
                    "database": self.settings.mongo_database,
                    "mode": self.settings.mongo_connect_mode,
                }))
            return self._db

    def close(self) -> None:
        """Close the underlying client and forget the connection."""
        with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None

    def collection(self, name: str) -> Collection:
        return self.connect()[name]

    @property
    def users(self) -> Collection:
        return self.collection(USERS)

    @property
    def metadata(self) -> Collection:
        return self.collection(METADATA)

    @property
    def tables(self) -> Collection:
        return self.collection(TABLES)


def get_store(request: Request) -> DocumentStore:
    """Dependency to retrieve the shared document store from the application state."""
    return request.app.state.store
