"""
Shared fixtures: an in-memory SQLite database and fake HTTP responses.
"""

from __future__ import annotations

import io
from collections.abc import Generator

import pytest
import requests
from urllib3 import HTTPResponse
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers all ORM models on Base.metadata
from db.base import Base
from db.session import build_session_factory


def _create_sqlite_engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite issues its own BEGIN lazily, which breaks SAVEPOINT; hand
    # transaction control to SQLAlchemy instead.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN")

    return engine


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = _create_sqlite_engine()
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture()
def db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def html_response():
    """Factory fixture for in-memory HTTP responses."""
    return make_response


def make_response(
    status_code: int,
    body: str | bytes = b"",
    *,
    url: str = "https://example.com",
) -> requests.Response:
    """Build a real requests.Response whose body is read from memory."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.headers["Content-Type"] = "text/html; charset=utf-8"
    content = body.encode("utf-8") if isinstance(body, str) else body
    response.raw = HTTPResponse(body=io.BytesIO(content), status=status_code, preload_content=False)
    return response
