"""
Database connection management for the API.

A single :class:`Database` wraps one pymongo ``MongoClient`` (which pools its
own connections) and the application database handle.  The app factory opens
it in the FastAPI lifespan and closes it on shutdown; routes receive the
database handle through the :func:`get_db` dependency.

Usage in a route::

    from api.database import get_db
    from fastapi import Depends

    @router.get("/example")
    def example(db=Depends(get_db)):
        ...
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Request
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from utils.config import AppConfig

_logger = logging.getLogger("rcm_api.database")


class Database:
    """Owns a MongoDB client and the database handle used by the routes.

    Either pass an already-built database handle (tests use a mongomock
    database) or call :meth:`from_config` to connect with pymongo.
    """

    def __init__(self, db: Any, client: Any | None = None) -> None:
        self._db = db
        self._client = client

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "Database":
        """Create a pymongo client for *cfg* (connection is established lazily)."""
        client = MongoClient(
            cfg.mongodb_uri,
            serverSelectionTimeoutMS=cfg.mongodb_timeout_ms,
        )
        _logger.info("MongoDB client created for database %s", cfg.db_name)
        return cls(client[cfg.db_name], client)

    @property
    def db(self) -> Any:
        return self._db

    @property
    def name(self) -> str:
        return getattr(self._db, "name", "")

    def ping(self) -> bool:
        """Return True if the server answers a ping command."""
        try:
            self._db.command("ping")
        except PyMongoError as exc:
            _logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    def close(self) -> None:
        """Close the owned client, if any."""
        if self._client is not None:
            self._client.close()
            self._client = None
            _logger.info("MongoDB client closed")


def get_database(request: Request) -> Database:
    """FastAPI dependency: the application's :class:`Database`."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise HTTPException(status_code=503, detail="Database is not initialised.")
    return database


def get_db(request: Request) -> Any:
    """FastAPI dependency: the MongoDB database handle."""
    return get_database(request).db
